"""
Integration tests for the bounce classifier.

Test components together against synthetic bundles on disk:
- Module-level default classifier (initialize -> classify -> reset)
- Bundle served over HTTP (mocked transport)
- API endpoints (FastAPI TestClient)
"""
