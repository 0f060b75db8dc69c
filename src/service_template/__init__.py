"""
service-template: A command-line API service scaffold.

This package provides a small command dispatch framework and the
commands built on top of it.

Modules:
    cli: Command protocol, registry, help rendering and dispatch
    server: HTTP application, middleware chain and health endpoint
    config: Configuration loading from TOML files and environment
    exceptions: Error hierarchy with context and suggestions

Quick Start::

    from service_template.cli import CLI

    class BuildCommand:
        def help(self): return "Build the project."
        def synopsis(self): return "Builds the project"
        def run(self, args): return 0

    cli = CLI(name="app", version="1.0", args=["build", "--fast"],
              commands={"build": BuildCommand})
    exit_code, err = cli.run()
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
