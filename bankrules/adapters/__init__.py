"""External adapters for the bankrules decision engine.

This package provides implementations of the core port interfaces and
the output formats for mutation reports.

Adapter Organization:

- store/: Account repositories (in-memory)
- authorizer/: Transfer approval gates (static, HTTP compliance service)
- clock: System and fixed clocks
- report/: Mutation report printers (stdout text, JSON)
"""
