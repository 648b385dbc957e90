from guildarc.app import main

raise SystemExit(main())
