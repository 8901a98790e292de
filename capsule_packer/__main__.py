"""Entry point for the capsule_packer package when run as a module."""

from capsule_packer.cli import main


def _run_main():
    """Wrapper to ensure main is called."""
    main()


if __name__ == "__main__":
    _run_main()
