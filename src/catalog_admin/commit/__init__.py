"""Upload -> write -> cleanup commit protocol."""

from catalog_admin.commit.protocol import CommitProtocol, CommitResult, CommitState

__all__ = ["CommitProtocol", "CommitResult", "CommitState"]
