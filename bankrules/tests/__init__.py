"""Test suite for the bankrules decision engine.

Organized into three categories:

1. core/: Unit tests for core domain logic
   - Minimal dependencies, fast execution
   - Uses in-memory fakes for ports

2. harness/: Specification suite and mutation runner tests
   - Runs the baseline scenarios against the reference and every variant

3. adapters/: Tests for adapter implementations
   - HTTP authorizer is exercised through httpx.MockTransport
"""
