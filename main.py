from vault_chooser.cli_chooser import main


if __name__ == "__main__":
    raise SystemExit(main())
