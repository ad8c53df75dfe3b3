from adr_radar.cli import main

raise SystemExit(main())
