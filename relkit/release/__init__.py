"""Release engine: ref resolution, idempotency checks and the workflows.

Submodules are imported directly (``relkit.release.backport`` etc.); nothing
is re-exported here.
"""
