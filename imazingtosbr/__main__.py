from imazingtosbr.cli import main

raise SystemExit(main())
