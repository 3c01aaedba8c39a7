"""bankrules: bank-account rule engine with a differential mutation-testing harness."""

__version__ = "0.1.0"
