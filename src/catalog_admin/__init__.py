"""catalog-admin: catalog and order administration over Firestore and Cloud Storage."""

__version__ = "0.1.0"
