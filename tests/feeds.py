"""Sample feed documents and fake HTTP plumbing shared by the tests."""

from typing import Optional

import requests

RSS_FEED = b"""<?xml version="1.0" encoding="utf-8"?>
<rss version="2.0" xmlns:content="http://purl.org/rss/1.0/modules/content/">
  <channel>
    <title>Example</title>
    <link>https://example.com/</link>
    <description>Example feed</description>
    <item>
      <title>A</title>
      <link>https://example.com/a</link>
      <description>&lt;p&gt;First &lt;em&gt;item&lt;/em&gt;&lt;/p&gt;</description>
      <content:encoded><![CDATA[<p>Full <strong>text</strong> of A</p>]]></content:encoded>
    </item>
    <item>
      <title>B</title>
      <link>https://example.com/b</link>
    </item>
    <item>
      <title>C</title>
      <description>Only a description</description>
    </item>
  </channel>
</rss>
"""

ATOM_FEED = b"""<?xml version="1.0" encoding="utf-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title>Atom example</title>
  <id>urn:example:feed</id>
  <updated>2024-05-01T00:00:00Z</updated>
  <entry>
    <title type="html">&lt;b&gt;One&lt;/b&gt;</title>
    <link href="https://example.com/1"/>
    <id>urn:example:1</id>
    <updated>2024-05-01T00:00:00Z</updated>
    <summary>Short</summary>
    <content type="html">&lt;div&gt;Long &lt;i&gt;body&lt;/i&gt;&lt;/div&gt;</content>
  </entry>
  <entry>
    <title>Two</title>
    <id>urn:example:2</id>
    <updated>2024-04-30T00:00:00Z</updated>
  </entry>
</feed>
"""

EMPTY_RSS_FEED = b"""<?xml version="1.0" encoding="utf-8"?>
<rss version="2.0">
  <channel>
    <title>Nothing yet</title>
    <link>https://example.com/</link>
    <description>No items</description>
  </channel>
</rss>
"""

HELLO_WORLD_FEED = b"""<?xml version="1.0" encoding="utf-8"?>
<rss version="2.0">
  <channel>
    <title>Hello</title>
    <link>https://x</link>
    <description>Hello feed</description>
    <item><title>Hello &lt;b&gt;World&lt;/b&gt;</title><link>https://x</link><description>&lt;p&gt;Hi&lt;/p&gt;</description></item>
  </channel>
</rss>
"""


def rss_with_titles(*titles: str) -> bytes:
    """Builds an RSS document with one item per title."""
    items = "".join(
        f"<item><title>{title}</title><link>https://example.com/{i}</link></item>"
        for i, title in enumerate(titles)
    )
    return (
        '<?xml version="1.0" encoding="utf-8"?><rss version="2.0"><channel>'
        "<title>Generated</title><link>https://example.com/</link>"
        f"<description>Generated</description>{items}</channel></rss>"
    ).encode("utf-8")


def make_response(
    status: int = 200,
    body: bytes = b"",
    reason: Optional[str] = "OK",
    content_type: Optional[str] = "application/rss+xml; charset=utf-8",
) -> requests.Response:
    """Builds a real Response object without touching the network."""
    resp = requests.Response()
    resp.status_code = status
    resp.reason = reason
    resp._content = body  # pylint: disable=protected-access
    if content_type:
        resp.headers["Content-Type"] = content_type
    return resp
