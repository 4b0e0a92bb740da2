"""Console constants and configuration."""

from prompt_toolkit.styles import Style

COMMANDS = ["replicate", "list", "show", "delete", "delete-all", "databases", "clear", "exit", "help"]

DIRECTIONS = ["push", "pull"]

REPLICATE_FLAGS = ["--continuous", "--once", "--create-target", "--no-create-target"]

HOST_ROLES = ["local", "remote"]

STYLE = Style.from_dict(
    {
        "prompt": "#E42528 bold",
        "command": "#0088ff bold",
    }
)

RED = "\033[38;2;228;37;40m"
GREEN = "\033[38;2;0;200;83m"
YELLOW = "\033[38;2;255;193;7m"
RESET = "\033[0m"

LOGO = f"""{RED}
  ██████╗ ██████╗ ██╗   ██╗ ██████╗██╗  ██╗██████╗ ███████╗██████╗
 ██╔════╝██╔═══██╗██║   ██║██╔════╝██║  ██║██╔══██╗██╔════╝██╔══██╗
 ██║     ██║   ██║██║   ██║██║     ███████║██████╔╝█████╗  ██████╔╝
 ██║     ██║   ██║██║   ██║██║     ██╔══██║██╔══██╗██╔══╝  ██╔═══╝
 ╚██████╗╚██████╔╝╚██████╔╝╚██████╗██║  ██║██║  ██║███████╗██║
  ╚═════╝ ╚═════╝  ╚═════╝  ╚═════╝╚═╝  ╚═╝╚═╝  ╚═╝╚══════╝╚═╝
{RESET}"""

WELCOME_TITLE = "couchrep - CouchDB replication directive manager"
WELCOME_HELP = "Type 'help' for commands or 'exit' to quit.\n"

PROMPT_TEXT = "couchrep> "

HELP_TEXT = """Available commands:
  replicate push|pull [options]       Create or update a replicator for every database
      --continuous | --once           Continuous replication (default from config)
      --create-target | --no-create-target
                                      Let the engine create missing targets
  list                                List replicators registered on the local host
  show <id>                           Show one replicator
  delete <id>                         Delete one replicator
  delete-all                          Delete every registered replicator
  databases [local|remote]            List databases on a host (default: local)
  clear                               Clear screen and redisplay welcome message
  help                                Show this help
  exit                                Exit REPL

push: local databases are replicated to the remote host.
pull: remote databases are replicated to the local host.
Replicators are always stored on the local host; triggered ones are left untouched.
Examples:
  replicate push
  replicate pull --once --no-create-target
  list
  delete 0d4f6f1c5c3e0a1b2c3d4e5f60718293
  databases remote"""
