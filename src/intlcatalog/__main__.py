from intlcatalog.backend.cli import main

raise SystemExit(main())
