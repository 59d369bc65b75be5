"""
feedsmith command line.

Usage:
    feedsmith pick <url> --field title --element "article h2" --container article.post
    feedsmith test <url> --container article.post --title h2 --link a
    feedsmith preview <url> --container article.post --title h2 --format json
    feedsmith create --name "My Blog" --url <url> --container article.post --title h2
    feedsmith list
    feedsmith render <feed-id> --format csv
    feedsmith templates save <url> --name blog --container article.post --title h2
    feedsmith templates list <domain-or-url>
    feedsmith serve --port 8000
"""

import argparse
import sys

import logfire
from rich.console import Console
from rich.table import Table

from feedsmith.config import Settings
from feedsmith.core.dom import parse_document
from feedsmith.core.pipeline import CONSOLE_THEME, FeedPipeline
from feedsmith.core.synthesis import ContentSelectorSession, SelectorSession
from feedsmith.models import ITEM_FIELDS, ContentFormat, FeedConfig, FieldKey, OutputFormat, Record, SelectorSet
from feedsmith.storage import FeedStorage, TemplateStorage, extract_domain
from feedsmith.utils.exceptions import FeedsmithError, FetchError
from feedsmith.utils.files import normalize_source_url
from feedsmith.utils.logging import setup_local_logging

SELECTOR_FIELDS = ('container',) + tuple(key.value for key in ITEM_FIELDS)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    selector_args = argparse.ArgumentParser(add_help=False)
    for field in SELECTOR_FIELDS:
        selector_args.add_argument(f'--{field}', type=str, help=f'CSS selector for the {field}')
    selector_args.add_argument('--content-selector', type=str, help='CSS selector on the content page')
    selector_args.add_argument(
        '--content-format',
        choices=[f.value for f in ContentFormat],
        default=ContentFormat.TEXT.value,
        help='Take content as text or HTML',
    )

    format_args = argparse.ArgumentParser(add_help=False)
    format_args.add_argument('--format', choices=[f.value for f in OutputFormat], default=OutputFormat.XML.value)
    format_args.add_argument('--output', '-o', type=str, help='Write the feed to a file instead of stdout')

    parser = argparse.ArgumentParser(prog='feedsmith', description='Turn list pages into RSS, JSON Feed or CSV')
    parser.add_argument('--fetcher', choices=['simple', 'playwright', 'firecrawl'], help='Override FEEDSMITH_FETCHER')
    parser.add_argument('--max-records', type=int, help='Override FEEDSMITH_MAX_RECORDS')
    subparsers = parser.add_subparsers(dest='command', required=True)

    pick = subparsers.add_parser('pick', parents=[selector_args], help='Derive a selector from an element')
    pick.add_argument('url', type=str)
    pick.add_argument('--field', choices=list(SELECTOR_FIELDS) + ['content'], required=True)
    pick.add_argument('--element', type=str, required=True, help='Any CSS selector locating the element to click')
    pick.add_argument('--nth', type=int, default=0, help='Which match of --element to click (0-based)')

    test = subparsers.add_parser('test', parents=[selector_args], help='Show the records the selectors match')
    test.add_argument('url', type=str)

    preview = subparsers.add_parser('preview', parents=[selector_args, format_args], help='Build a feed once')
    preview.add_argument('url', type=str)
    preview.add_argument('--name', type=str, help='Feed title (defaults to the domain)')

    create = subparsers.add_parser('create', parents=[selector_args], help='Save a feed')
    create.add_argument('--name', type=str, required=True)
    create.add_argument('--url', type=str, required=True)
    create.add_argument('--template', type=str, help='Start from a saved template for the URL domain')

    subparsers.add_parser('list', help='List saved feeds')

    render = subparsers.add_parser('render', parents=[format_args], help='Build a saved feed')
    render.add_argument('feed_id', type=str)

    delete = subparsers.add_parser('delete', help='Delete a saved feed')
    delete.add_argument('feed_id', type=str)

    templates = subparsers.add_parser('templates', help='Manage saved selector templates')
    template_commands = templates.add_subparsers(dest='template_command', required=True)
    template_save = template_commands.add_parser('save', parents=[selector_args])
    template_save.add_argument('url', type=str)
    template_save.add_argument('--name', type=str, required=True)
    template_list = template_commands.add_parser('list')
    template_list.add_argument('domain', type=str, help='Domain or any URL on it')
    template_delete = template_commands.add_parser('delete')
    template_delete.add_argument('template_id', type=str)

    serve = subparsers.add_parser('serve', help='Run the HTTP app')
    serve.add_argument('--host', type=str, default='127.0.0.1')
    serve.add_argument('--port', type=int, default=8000)
    serve.add_argument('--debug', action='store_true')

    return parser


def selectors_from_args(args: argparse.Namespace, base: SelectorSet | None = None) -> SelectorSet:
    """Selectors given on the command line, layered over ``base``."""
    selectors = base or SelectorSet()
    for field in SELECTOR_FIELDS:
        value = getattr(args, field, None)
        if value:
            selectors = selectors.with_selector(field, value)
    return selectors


class FeedsmithCLI:
    """Runs one parsed command against settings, storage and a fetcher."""

    def __init__(self, settings: Settings, console: Console | None = None):
        self.settings = settings
        self.console = console or Console(theme=CONSOLE_THEME)

    def run(self, args: argparse.Namespace) -> int:
        handler = getattr(self, f'cmd_{args.command}')
        try:
            return handler(args)
        except (FeedsmithError, ValueError) as e:
            logfire.error('Command failed', command=args.command, error=str(e))
            self.console.print(f'[danger]✗ {e}[/danger]')
            return 1

    # ------------------------------------------------------------------
    # Selector work
    # ------------------------------------------------------------------

    def cmd_pick(self, args: argparse.Namespace) -> int:
        url = normalize_source_url(args.url)
        document = self._load_document(url)

        candidates = document.select(args.element)
        if args.nth >= len(candidates):
            self.console.print(f'[danger]✗ {args.element} matched {len(candidates)} element(s)[/danger]')
            return 1
        node = candidates[args.nth]

        if args.field == 'content':
            selector = ContentSelectorSession().pointer_click(node)
        else:
            session = SelectorSession(document, source_url=url, selectors=selectors_from_args(args))
            session.listen(args.field)
            session.pointer_enter(node)
            session.pointer_click(node)
            selector = session.selectors.get(args.field)
            self.console.print(f'[info]Matches on page: {len(session.matches())}[/info]')

        self.console.print(f'[success]✓ {args.field}:[/success] {selector}')
        return 0

    def cmd_test(self, args: argparse.Namespace) -> int:
        url = normalize_source_url(args.url)
        document = self._load_document(url)
        session = SelectorSession(document, source_url=url, selectors=selectors_from_args(args))

        records = session.test_selectors()
        if not records:
            self.console.print('[warning]⚠ No records matched[/warning]')
            return 0

        self._print_records(records, session.selectors)
        return 0

    # ------------------------------------------------------------------
    # Feeds
    # ------------------------------------------------------------------

    def cmd_preview(self, args: argparse.Namespace) -> int:
        url = normalize_source_url(args.url)
        config = FeedConfig(
            name=args.name or extract_domain(url) or url,
            source_url=url,
            selectors=selectors_from_args(args),
            content_selector=args.content_selector,
            content_format=args.content_format,
        )
        with self._pipeline() as pipeline:
            body, _, count = pipeline.render(config, args.format)

        self._emit(body, args.output)
        self.console.print(f'[success]✓ Built preview with {count} item(s)[/success]')
        return 0

    def cmd_create(self, args: argparse.Namespace) -> int:
        url = normalize_source_url(args.url)
        base = SelectorSet()
        content_selector = args.content_selector
        if args.template:
            template = TemplateStorage(self.settings.templates_dir).get(extract_domain(url), args.template)
            base = template.selectors
            content_selector = content_selector or template.content_selector

        config = FeedConfig(
            name=args.name,
            source_url=url,
            selectors=selectors_from_args(args, base),
            content_selector=content_selector,
            content_format=args.content_format,
        )
        feed = FeedStorage(self.settings.storage_dir).create(config)
        self.console.print(f'[success]✓ Created feed[/success] {feed.id}')
        return 0

    def cmd_list(self, args: argparse.Namespace) -> int:
        feeds = FeedStorage(self.settings.storage_dir).list_feeds()
        if not feeds:
            self.console.print('[warning]No feeds saved yet.[/warning]')
            return 0

        table = Table(title='Saved Feeds')
        table.add_column('ID', style='cyan')
        table.add_column('Name')
        table.add_column('Source')
        table.add_column('Items', justify='right')
        table.add_column('Last scraped')
        for feed in feeds:
            scraped = feed.last_scraped_at.strftime('%Y-%m-%d %H:%M') if feed.last_scraped_at else '-'
            table.add_row(feed.id, feed.name, feed.source_url, str(feed.item_count), scraped)
        self.console.print(table)
        return 0

    def cmd_render(self, args: argparse.Namespace) -> int:
        storage = FeedStorage(self.settings.storage_dir)
        with self._pipeline(storage) as pipeline:
            body, _ = pipeline.render_feed(args.feed_id, args.format)
        self._emit(body, args.output)
        return 0

    def cmd_delete(self, args: argparse.Namespace) -> int:
        FeedStorage(self.settings.storage_dir).delete(args.feed_id)
        self.console.print(f'[success]✓ Deleted feed {args.feed_id}[/success]')
        return 0

    # ------------------------------------------------------------------
    # Templates
    # ------------------------------------------------------------------

    def cmd_templates(self, args: argparse.Namespace) -> int:
        storage = TemplateStorage(self.settings.templates_dir)

        if args.template_command == 'save':
            domain = extract_domain(normalize_source_url(args.url))
            template = storage.save(
                domain,
                args.name,
                selectors_from_args(args),
                content_selector=args.content_selector,
                content_format=ContentFormat(args.content_format),
            )
            self.console.print(f'[success]✓ Saved template {domain}/{template.name}[/success] ({template.id})')
            return 0

        if args.template_command == 'delete':
            storage.delete(args.template_id)
            self.console.print(f'[success]✓ Deleted template {args.template_id}[/success]')
            return 0

        domain = extract_domain(normalize_source_url(args.domain))
        templates = storage.list_for_domain(domain)
        if not templates:
            self.console.print(f'[warning]No templates saved for {domain}.[/warning]')
            return 0

        table = Table(title=f'Templates for {domain}')
        table.add_column('Name', style='cyan')
        table.add_column('Fields')
        table.add_column('Updated')
        for template in templates:
            fields = ', '.join(key.value for key in template.selectors.fields())
            table.add_row(template.name, fields, template.updated_at.strftime('%Y-%m-%d %H:%M'))
        self.console.print(table)
        return 0

    def cmd_serve(self, args: argparse.Namespace) -> int:
        from feedsmith.api import create_app

        app = create_app()
        app.run(host=args.host, port=args.port, debug=args.debug)
        return 0

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _pipeline(self, storage: FeedStorage | None = None) -> '_PipelineContext':
        return _PipelineContext(self.settings, storage, self.console)

    def _load_document(self, url: str):
        fetcher = self.settings.build_fetcher()
        try:
            with self.console.status('[step]Fetching page...[/step]'):
                result = fetcher.fetch(url)
        finally:
            fetcher.close()

        if not result.success or result.html is None:
            raise FetchError(url, result.block_reason or 'no HTML received')
        return parse_document(result.html, url=url)

    def _print_records(self, records: list[Record], selectors: SelectorSet) -> None:
        fields = selectors.fields() or [FieldKey.LINK]
        table = Table(title=f'{len(records)} record(s)')
        for key in fields:
            table.add_column(key.value.capitalize(), overflow='fold')
        for record in records:
            table.add_row(*[(record.get(key.value) or '') for key in fields])
        self.console.print(table)

    def _emit(self, body: str, output: str | None) -> None:
        if output:
            with open(output, 'w', encoding='utf-8', newline='') as f:
                f.write(body)
            self.console.print(f'[info]Wrote {output}[/info]')
        else:
            sys.stdout.write(body)


class _PipelineContext:
    """Pipeline bound to a freshly built fetcher that is closed on exit."""

    def __init__(self, settings: Settings, storage: FeedStorage | None, console: Console):
        self.settings = settings
        self.storage = storage
        self.console = console
        self.fetcher = None

    def __enter__(self) -> FeedPipeline:
        self.fetcher = self.settings.build_fetcher()
        return FeedPipeline(
            self.fetcher,
            storage=self.storage,
            max_records=self.settings.max_records,
            console=self.console,
        )

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.fetcher is not None:
            self.fetcher.close()


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    console = Console(theme=CONSOLE_THEME, stderr=True)

    try:
        settings = Settings.from_env()
        if args.fetcher or args.max_records:
            settings = Settings(
                **{
                    **vars(settings),
                    'fetcher': args.fetcher or settings.fetcher,
                    'max_records': args.max_records or settings.max_records,
                }
            )
    except ValueError as e:
        console.print(f'[danger]✗ {e}[/danger]')
        return 1

    if settings.logfire_token:
        logfire.configure(token=settings.logfire_token, service_name='feedsmith')

    log_file = setup_local_logging(settings.log_level)
    console.print(f'[info]Logging to {log_file}[/info]')

    return FeedsmithCLI(settings, console).run(args)


if __name__ == '__main__':
    sys.exit(main())
