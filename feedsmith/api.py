"""HTTP app serving stored feeds and unsaved previews."""

import logging
from typing import Any

import logfire
from flask import Flask, Response, request
from pydantic import ValidationError

from feedsmith.config import Settings
from feedsmith.core.fetcher import HTMLFetcher
from feedsmith.core.pipeline import FeedPipeline
from feedsmith.models import FeedConfig
from feedsmith.storage import FeedStorage
from feedsmith.utils.exceptions import FeedNotFoundError, FetchError, UnsupportedFormatError

logger = logging.getLogger(__name__)

TEXT_MIMETYPE = 'text/plain; charset=utf-8'


def _text(message: str, status: int) -> Response:
    return Response(message, status=status, mimetype=TEXT_MIMETYPE)


def create_app(test_config: dict[str, Any] | None = None) -> Flask:
    """Create the feed app.

    Config keys:
        STORAGE_DIR: Feed storage directory (None for .feedsmith/feeds)
        MAX_RECORDS: Cap on items per feed
        FETCHER: A shared HTMLFetcher. When unset, one is built per request
            from the environment settings and closed afterwards.

    """
    app = Flask(__name__)

    testing = bool(test_config and test_config.get('TESTING'))
    settings = Settings.from_env(load_env_file=not testing)
    app.config.update(
        STORAGE_DIR=settings.storage_dir,
        MAX_RECORDS=settings.max_records,
        FETCHER=None,
        TESTING=False,
    )
    if test_config:
        app.config.update(test_config)

    storage = FeedStorage(app.config['STORAGE_DIR'])

    def run_pipeline(action):
        shared: HTMLFetcher | None = app.config.get('FETCHER')
        fetcher = shared or settings.build_fetcher()
        pipeline = FeedPipeline(fetcher, storage=storage, max_records=app.config['MAX_RECORDS'])
        try:
            return action(pipeline)
        finally:
            if shared is None:
                fetcher.close()

    @app.get('/feed')
    def feed_route() -> Response:
        feed_id = request.args.get('id', '').strip()
        if not feed_id:
            return _text('Missing feed id.', 400)

        output_format = request.args.get('format') or 'xml'
        with logfire.span('serve_feed', feed_id=feed_id, format=output_format):
            try:
                body, fmt = run_pipeline(lambda p: p.render_feed(feed_id, output_format, feed_url=request.url))
            except FeedNotFoundError:
                return _text('Feed not found.', 404)
            except UnsupportedFormatError as e:
                return _text(str(e), 400)
            except FetchError as e:
                logger.warning(f'Feed {feed_id} failed: {e}')
                return _text(str(e), 502)

        return Response(body, mimetype=fmt.content_type)

    @app.post('/preview')
    def preview_route() -> Response:
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict) or not isinstance(payload.get('preview'), dict):
            return _text('Request body must be JSON with a "preview" object.', 400)

        try:
            config = FeedConfig.model_validate(payload['preview'])
        except ValidationError as e:
            return _text(f'Invalid feed configuration: {e.error_count()} error(s)', 400)

        output_format = payload.get('format') or 'xml'
        with logfire.span('serve_preview', url=config.source_url, format=output_format):
            try:
                body, fmt, _ = run_pipeline(lambda p: p.render(config, output_format))
            except UnsupportedFormatError as e:
                return _text(str(e), 400)
            except FetchError as e:
                return _text(str(e), 502)

        return Response(body, mimetype=fmt.content_type)

    return app
