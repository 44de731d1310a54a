"""Application pagination – offset cursors and pages."""
from pg_entitlements.application.pagination.cursor import DEFAULT_PAGE_SIZE, Pager, paginate
from pg_entitlements.application.pagination.page import Page

__all__ = ["DEFAULT_PAGE_SIZE", "Page", "Pager", "paginate"]
