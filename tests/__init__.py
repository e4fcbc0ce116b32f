# cipherlab Test Suite
"""
Test suite including:
- Unit tests with published test vectors
- Integration tests against the `cryptography` package
- Security tests (invalid inputs, tampering)

Run with: pytest
Coverage: pytest --cov=cipherlab
"""
