from qrsvg.cli import main

raise SystemExit(main())
