from bizdesk.models.document import DocumentRecord  # noqa: F401
