"""Allow ``python -m asg_rollout``."""

from asg_rollout.cli.main import cli_main

if __name__ == "__main__":
    cli_main()
