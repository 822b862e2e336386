from github_activity.main import main

raise SystemExit(main())
