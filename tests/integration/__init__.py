"""Integration tests for gist-sync.

These tests run real git commands against local bare repositories that stand
in for gist remotes. The GitHub API is mocked; no network access is needed.

Test Coverage:
- Mirror synchronization: clone missing mirrors, reuse existing ones
- Failure isolation: a gist whose remote is unusable is skipped
- Edit/publish: no-op on an unchanged file, commit and push on a change
- CLI: `gist list` and `gist edit` from a cached listing

Run only these tests with:
    pytest tests/integration -m integration
"""
