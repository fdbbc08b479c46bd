from clash_cli.cmd.cli import app

if __name__ == "__main__":
    app(prog_name="clash-cli")
