"""Root pytest configuration for all tests.

This conftest applies to all test types (unit, integration).
"""

import logging

# urllib3 logs every retry and connection at DEBUG; keep test output readable.
logging.getLogger("urllib3").setLevel(logging.WARNING)
