"""
Unit tests for the bounce classifier.

Test individual components in isolation:
- Tokenizer, weight store, forward pass and bundle validation
- Rule tables, fallback cascade, retry timing and blocklist extraction
- Model loaders (local directory, HTTP via httpx.MockTransport)
- ClassifierContext lifecycle and decisions
- Data models and API models
"""
