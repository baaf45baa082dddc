"""Main entry point for the tree tracker."""
import logging
from registry import Registry
from storage import Storage
from cli import CLI
import config


def main():
    logging.basicConfig(
        level=getattr(logging, config.log_level(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    storage = Storage()
    registry = Registry.load(storage)
    cli = CLI(registry, storage)
    cli.run()

if __name__ == "__main__":
    main()
