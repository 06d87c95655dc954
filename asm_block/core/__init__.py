"""Core lexing, rendering and fragment modules.

WHY: The core package holds everything that turns assembly source text
into the rendered template string. These modules are consumed by the
CLI, the HTTP API and the formatters and must stay backward-compatible.

HOW: tokens.py defines the token vocabulary, lexer.py builds token
streams from text, transducer.py renders streams to strings,
fragments.py and library.py provide named, parameterized fragments.

RULES:
- The transducer never lexes text and never sees fragment names
- Only library.py performs I/O; everything else is pure
- User input errors are raised from errors.py, all ValueError subclasses
"""
