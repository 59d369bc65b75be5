"""Storage for feeds and selector templates."""

from feedsmith.storage.persistence import FeedStorage
from feedsmith.storage.templates import TemplateStorage, extract_domain

__all__ = ['FeedStorage', 'TemplateStorage', 'extract_domain']
