from service_registry.cli.runner import run_cli

run_cli()
