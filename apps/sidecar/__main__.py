from apps.sidecar.cli import main

raise SystemExit(main())
