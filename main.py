"""
Monkey Programming Language - Main Entry Point
Runs scripts, dumps tokens/ASTs, and hosts the interactive read/eval/print loop
"""

import sys
import argparse
import os
from typing import List, Optional

# Readline support for history and auto-completion
try:
  import readline
  READLINE_AVAILABLE = True
except ImportError:
  READLINE_AVAILABLE = False

from error_handling import MonkeyParseError, MonkeyRuntimeError, format_parse_errors
from interpreter import Interpreter, create_debug_interpreter, create_interpreter
from objects import NULL
from parsing import create_debug_parser, create_parser, pretty_print_ast


VERSION = "Monkey v0.1.0"
PROMPT = ">> "
HISTORY_FILE = os.path.expanduser("~/.monkey_history")


def create_arg_parser() -> argparse.ArgumentParser:
  """Create command line argument parser"""
  parser = argparse.ArgumentParser(
      prog='monkey',
      description='Monkey Programming Language - tree-walking interpreter',
      formatter_class=argparse.RawDescriptionHelpFormatter,
      epilog="""
Examples:
  %(prog)s script.mk             # Run a Monkey script
  %(prog)s -i                    # Interactive mode (not with a script)
  %(prog)s --tokens script.mk    # Show the token stream
  %(prog)s --parse script.mk     # Parse and show the AST
  %(prog)s --debug script.mk     # Run with debug output
        """
  )

  parser.add_argument(
      'script',
      nargs='?',
      help='Monkey script file to execute'
  )

  parser.add_argument(
      '-i', '--interactive',
      action='store_true',
      help='Start interactive mode'
  )

  parser.add_argument(
      '--tokens',
      action='store_true',
      help='Tokenize file and show tokens (for debugging)'
  )

  parser.add_argument(
      '--parse',
      action='store_true',
      help='Parse file and show AST (for debugging)'
  )

  parser.add_argument(
      '--debug',
      action='store_true',
      help='Enable debug output for all stages'
  )

  parser.add_argument(
      '--version',
      action='version',
      version=VERSION
  )

  return parser


def read_source(script_path: str) -> str:
  with open(script_path, 'r', encoding='utf-8') as f:
    return f.read()


def tokenize_file(script_path: str, debug: bool = False) -> int:
  """Print the token stream of a Monkey script"""
  parser = create_debug_parser() if debug else create_parser()
  try:
    source = read_source(script_path)
  except (OSError, UnicodeDecodeError) as e:
    print(f"Error: cannot read '{script_path}': {e}")
    return 1

  for token in parser.tokenize(source):
    print(token)
  return 0


def parse_file(script_path: str, debug: bool = False) -> int:
  """Parse a Monkey script file and show the AST"""
  parser = create_debug_parser() if debug else create_parser()
  try:
    program = parser.parse_file(script_path)
  except MonkeyParseError as e:
    print(format_parse_errors(e.report()), end="")
    return 1

  print(f"Parsed {len(program.statements)} top-level statements:")
  print("=" * 50)
  print(pretty_print_ast(program), end="")
  print("=" * 50)
  print(program)
  return 0


def run_script_file(script_path: str, debug: bool = False) -> int:
  """Run a Monkey script file; print the final value unless it is null"""
  interpreter = create_debug_interpreter() if debug else create_interpreter()

  try:
    result = interpreter.run_file(script_path)
  except MonkeyParseError as e:
    print(format_parse_errors(e.report()), end="")
    return 1
  except MonkeyRuntimeError as e:
    print(e)
    return 1
  except RecursionError:
    print(f"{script_path}: ERROR: maximum recursion depth exceeded")
    return 1

  if result is not NULL:
    print(result.inspect())
  return 0


def setup_readline() -> None:
  """Setup readline with history and auto-completion"""
  if not READLINE_AVAILABLE:
    return

  try:
    readline.read_history_file(HISTORY_FILE)
  except OSError:
    pass  # First time, no history yet, or permission denied

  readline.set_history_length(1000)

  completions = [
      # Keywords
      "fn", "let", "true", "false", "if", "else", "return",
      # REPL commands
      ":tokens", ":parse", ":env", ":help", "exit"
  ]

  def completer(text, state):
    options = [cmd for cmd in completions if cmd.startswith(text)]
    if state < len(options):
      return options[state]
    return None

  readline.set_completer(completer)
  readline.parse_and_bind("tab: complete")

  import atexit
  atexit.register(save_history)


def save_history() -> None:
  try:
    readline.write_history_file(HISTORY_FILE)
  except OSError:
    pass


def print_help() -> None:
  print("REPL Commands:")
  print("  :tokens <src>     - Show the token stream")
  print("  :parse <src>      - Show the parsed program in canonical form")
  print("  :env              - Show current bindings")
  print("  :help             - Show this help")
  print("  exit              - Exit REPL")
  print()
  print("Language features:")
  print("  let x = 5;                      - Binding")
  print("  let add = fn(a, b) { a + b };   - Function literal")
  print("  add(1, 2)                       - Call")
  print("  if (x > 1) { x } else { 0 }     - Conditional")


def handle_repl_line(line: str, interpreter: Interpreter) -> bool:
  """Process one line of REPL input. Returns False when the session should end."""
  code = line.strip()

  if code == "exit":
    return False

  if not code:
    return True

  if code.startswith(":tokens "):
    for token in interpreter.parser.tokenize(code[len(":tokens "):]):
      print(token)
    return True

  if code.startswith(":parse "):
    try:
      print(interpreter.parser.parse_string(code[len(":parse "):]))
    except MonkeyParseError as e:
      print(format_parse_errors(e.report(), banner=True), end="")
    return True

  if code == ":env":
    bindings = list(interpreter.environment.bindings())
    if not bindings:
      print("  (no bindings)")
    for name, value in bindings:
      val_str = value.inspect().replace("\n", " ")
      if len(val_str) > 60:
        val_str = val_str[:57] + "..."
      print(f"  {name} = {val_str}")
    return True

  if code == ":help":
    print_help()
    return True

  try:
    result = interpreter.run(line)
    print(result.inspect())
  except MonkeyParseError as e:
    print(format_parse_errors(e.report(), banner=True), end="")
  except MonkeyRuntimeError as e:
    print(e)
  except RecursionError:
    print("ERROR: maximum recursion depth exceeded")

  return True


def run_interactive_mode(debug: bool = False) -> None:
  """Run Monkey in interactive mode; bindings persist across lines"""
  print(f"{VERSION} - Interactive Mode")
  print("Type 'exit' to quit, ':help' for commands")
  if READLINE_AVAILABLE:
    print("Readline enabled: Use ↑/↓ for history, Tab for completion")
  if debug:
    print("Debug mode enabled")
  print()

  setup_readline()
  interpreter = create_debug_interpreter() if debug else create_interpreter()

  while True:
    try:
      line = input(PROMPT)
    except (KeyboardInterrupt, EOFError):
      print("\nGoodbye!")
      break

    if not handle_repl_line(line, interpreter):
      break


def main(argv: Optional[List[str]] = None) -> None:
  """Main entry point for Monkey"""
  if argv is None:
    argv = sys.argv[1:]

  arg_parser = create_arg_parser()
  args = arg_parser.parse_args(argv)

  if args.script and args.interactive:
    arg_parser.error("-i/--interactive cannot be combined with a script")

  if args.script:
    if not os.path.exists(args.script):
      print(f"Error: Script file '{args.script}' does not exist")
      sys.exit(1)

    if args.tokens:
      status = tokenize_file(args.script, debug=args.debug)
    elif args.parse:
      status = parse_file(args.script, debug=args.debug)
    else:
      status = run_script_file(args.script, debug=args.debug)
    sys.exit(status)

  run_interactive_mode(debug=args.debug)


if __name__ == "__main__":
  main()
