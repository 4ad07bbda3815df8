# ABOUTME: Shared test fixtures for opml-tree.
# ABOUTME: Provides a sample subscription list and resets structlog between tests.

import pytest
import structlog

SAMPLE_OPML = """\
<?xml version="1.0" encoding="UTF-8"?>
<opml version="2.0">
  <head>
    <title>My Feeds</title>
    <dateCreated>Sun, 08 Feb 2026 12:00:00 GMT</dateCreated>
    <ownerName>Jane Doe</ownerName>
  </head>
  <body>
    <outline text="Tech" title="Tech">
      <outline text="Simon Willison"
               title="Simon Willison"
               type="rss"
               xmlUrl="https://simonwillison.net/atom/everything/"
               htmlUrl="https://simonwillison.net/" />
      <outline text="Julia Evans"
               title="Julia Evans"
               type="rss"
               xmlUrl="https://jvns.ca/atom.xml"
               htmlUrl="https://jvns.ca/"
               category="/blogs" />
    </outline>
    <outline text="News" title="News">
      <outline text="Hacker News"
               type="rss"
               xmlUrl="https://hnrss.org/frontpage" />
      <outline text="Project page" type="link" url="https://example.com/" />
    </outline>
  </body>
</opml>
"""


@pytest.fixture(autouse=True)
def _reset_structlog():
    """Undo logging configuration done by the CLI."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def sample_opml() -> str:
    """Subscription list with folders, feeds, a link and a vendor attribute."""
    return SAMPLE_OPML
