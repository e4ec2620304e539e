from gitdesc.cli import main

raise SystemExit(main())
