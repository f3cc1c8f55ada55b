"""
Talkie: a line-oriented to-do list chatbot.

Packages:
- core: session state, ports, error taxonomy
- tasks: task model, task list, flat-file persistence
- cli: commands, bootstrap, entrypoint
- connectors: console REPL
"""

__version__ = "0.1.0"
