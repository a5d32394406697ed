from rpncalc.main import main

raise SystemExit(main())
