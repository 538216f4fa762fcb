import sys

from git_repo_keeper.cli.main import main

sys.exit(main())
