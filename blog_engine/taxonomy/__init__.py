# Taxonomy Module
# Tag/category listings and pagination

from .index import TAXONOMIES, TaxonomyIndex, TaxonomyTerm
from .pagination import Pager, page_url, paginate

__all__ = [
    "TAXONOMIES",
    "Pager",
    "TaxonomyIndex",
    "TaxonomyTerm",
    "page_url",
    "paginate",
]
