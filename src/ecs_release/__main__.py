"""Allow ``python -m ecs_release``."""

from ecs_release.cli.main import main

if __name__ == "__main__":
    main()
