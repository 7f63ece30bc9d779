# File: tests/test_link_extractor.py
import pytest
from aiohttp import web

from fakes import FakeDocument, FakeRenderer, serve_app
from site_probe.config import ProbeConfig
from site_probe.crawler.fetcher import HttpRenderer
from site_probe.crawler.link_extractor import discover_links, filter_same_origin, url_origin


def test_same_origin_filter():
    hrefs = [
        "https://example.com/en/about",
        "https://other.com/x",
        "/relative-ignored-if-unparsable",
    ]
    assert filter_same_origin(hrefs, "https://example.com/en/") == ["https://example.com/en/about"]


@pytest.mark.parametrize(
    "url,origin",
    [
        ("https://Example.com/a", ("https", "example.com", 443)),
        ("https://example.com:443/a", ("https", "example.com", 443)),
        ("http://example.com:8080/", ("http", "example.com", 8080)),
        ("mailto:someone@example.com", None),
        ("javascript:void(0)", None),
        ("http://[::1", None),
        ("http://example.com:notaport/", None),
        ("", None),
    ],
)
def test_url_origin(url, origin):
    assert url_origin(url) == origin


def test_scheme_and_port_are_part_of_origin():
    hrefs = [
        "http://example.com/en/plain",
        "https://example.com:8443/en/alt-port",
        "https://example.com:443/en/default-port",
        "https://sub.example.com/en/",
    ]
    assert filter_same_origin(hrefs, "https://example.com/en/") == [
        "https://example.com:443/en/default-port"
    ]


def test_duplicates_collapse_in_first_seen_order():
    hrefs = ["https://ex.com/b", "https://ex.com/a", "https://ex.com/b"]
    assert filter_same_origin(hrefs, "https://ex.com/en/") == ["https://ex.com/b", "https://ex.com/a"]


@pytest.mark.asyncio()
async def test_discover_reads_nav_and_footer():
    renderer = FakeRenderer({
        "https://ex.com/en/": FakeDocument(
            nav=["https://ex.com/en/a", "https://cdn.other.net/x"],
            footer=["https://ex.com/en/contact", "https://ex.com/en/a"],
        )
    })
    async with renderer.session() as session:
        async with session.page() as page:
            await page.goto("https://ex.com/en/", 1)
            links = await discover_links(page, "https://ex.com/en/")

    assert set(links) == {"https://ex.com/en/a", "https://ex.com/en/contact"}


@pytest.mark.asyncio()
async def test_discover_on_rendered_html(unused_tcp_port: int):
    app = web.Application()

    async def handle_entry(_):
        return web.Response(
            text="""
            <html><body>
              <nav><a href="/en/about">About</a><a href="https://other.com/">Out</a></nav>
              <main>
                <a href="/en/not-in-menu">ignored: outside nav, lists and footer</a>
                <ol><li><a href="products">Products</a></li></ol>
              </main>
              <ul><li><a href=" /en/blog ">Blog</a></li><li><a>no href</a></li></ul>
              <footer><a href="/en/contact#form">Contact</a><a href="mailto:x@ex.com">Mail</a></footer>
            </body></html>
            """,
            content_type="text/html",
        )

    app.router.add_get("/en/", handle_entry)

    async for base in serve_app(app, unused_tcp_port):
        renderer = HttpRenderer(ProbeConfig(user_agent="TestAgent/1.0"))
        async with renderer.session() as session:
            async with session.page() as page:
                await page.goto(f"{base}/en/", 2.0)
                links = await discover_links(page, f"{base}/en/")

    assert set(links) == {
        f"{base}/en/about",
        f"{base}/en/products",
        f"{base}/en/blog",
        f"{base}/en/contact#form",
    }
