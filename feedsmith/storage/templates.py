"""Saved selector templates, keyed by domain and name."""

import json
import logging
import os
from urllib.parse import urlparse

from feedsmith.models import ContentFormat, SavedSelectorTemplate, SelectorSet
from feedsmith.models.feeds import utcnow
from feedsmith.utils.exceptions import FeedNotFoundError
from feedsmith.utils.files import init_feedsmith


def extract_domain(url: str) -> str:
    """Return the host of a URL without a 'www.' prefix, or '' if it has none."""
    try:
        host = urlparse(url).hostname or ''
    except ValueError:
        return ''
    return host.removeprefix('www.')


class TemplateStorage:
    """Stores selector templates in one JSON file per domain.

    Attributes:
        storage_dir: Directory path where template files are stored

    """

    def __init__(self, storage_dir: str | None = None):
        if storage_dir is None:
            storage_dir = str(init_feedsmith('templates'))
        os.makedirs(storage_dir, exist_ok=True)
        self.storage_dir = storage_dir
        self.logger = logging.getLogger(__name__)

    def save(
        self,
        domain: str,
        name: str,
        selectors: SelectorSet,
        content_selector: str | None = None,
        content_format: ContentFormat = ContentFormat.TEXT,
    ) -> SavedSelectorTemplate:
        """Insert or replace the template named ``name`` for ``domain``.

        Returns:
            The stored template. Replacing keeps the original id and created_at.

        """
        templates = self._load_domain(domain)
        existing = next((t for t in templates if t.name == name), None)

        if existing is None:
            template = SavedSelectorTemplate(
                domain=domain,
                name=name,
                selectors=selectors,
                content_selector=content_selector or None,
                content_format=content_format,
            )
            templates.append(template)
        else:
            template = existing.model_copy(
                update={
                    'selectors': selectors,
                    'content_selector': content_selector or None,
                    'content_format': content_format,
                    'updated_at': utcnow(),
                }
            )
            templates = [template if t.id == existing.id else t for t in templates]

        self._write_domain(domain, templates)
        self.logger.info(f'Saved selector template {domain}/{name}')
        return template

    def list_for_domain(self, domain: str) -> list[SavedSelectorTemplate]:
        """Templates for a domain, most recently updated first."""
        return sorted(self._load_domain(domain), key=lambda t: t.updated_at, reverse=True)

    def get(self, domain: str, name: str) -> SavedSelectorTemplate:
        for template in self._load_domain(domain):
            if template.name == name:
                return template
        raise FeedNotFoundError('Template', f'{domain}/{name}')

    def delete(self, template_id: str) -> None:
        """Delete a template by id, whatever its domain."""
        for filename in os.listdir(self.storage_dir):
            if not filename.endswith('.json'):
                continue
            domain_file = os.path.join(self.storage_dir, filename)
            templates = self._read_file(domain_file)
            remaining = [t for t in templates if t.id != template_id]
            if len(remaining) != len(templates):
                self._write_file(domain_file, remaining)
                return
        raise FeedNotFoundError('Template', template_id)

    def _load_domain(self, domain: str) -> list[SavedSelectorTemplate]:
        return self._read_file(self._get_filepath(domain))

    def _write_domain(self, domain: str, templates: list[SavedSelectorTemplate]) -> None:
        self._write_file(self._get_filepath(domain), templates)

    def _read_file(self, filepath: str) -> list[SavedSelectorTemplate]:
        if not os.path.exists(filepath):
            return []
        try:
            with open(filepath, encoding='utf-8') as f:
                return [SavedSelectorTemplate.model_validate(item) for item in json.load(f)]
        except (OSError, ValueError) as e:
            self.logger.error(f'Error loading templates from {filepath}: {e}')
            return []

    def _write_file(self, filepath: str, templates: list[SavedSelectorTemplate]) -> None:
        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump([t.model_dump(mode='json') for t in templates], f, indent=2, ensure_ascii=False)

    def _get_filepath(self, domain: str) -> str:
        safe_domain = (domain or 'unknown').replace('.', '_').replace('/', '_')
        return os.path.join(self.storage_dir, f'templates_{safe_domain}.json')
