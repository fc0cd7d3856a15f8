from docsync.cli import main

raise SystemExit(main())
