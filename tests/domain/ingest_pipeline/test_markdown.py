from __future__ import annotations

from cockpitgraph.domain.ingest_pipeline.markdown import (
    guess_media_type,
    is_asset_link,
    scan_markdown,
)


def test_scan_finds_images_in_order() -> None:
    text = "Intro ![first](/img/a.png) and ![](img/b.jpg \"Title\") done"

    references = scan_markdown(text)

    assert references.images == ["/img/a.png", "img/b.jpg"]
    assert references.assets == []


def test_images_are_not_counted_as_links() -> None:
    references = scan_markdown("![diagram](/files/diagram.pdf)")

    assert references.images == ["/files/diagram.pdf"]
    assert references.assets == []


def test_links_with_media_types_are_assets() -> None:
    text = (
        "[Brochure](/storage/brochure.pdf) "
        "[Home](https://example.com/) "
        "[About](/about.html) "
        "[Clip](<clips/intro.mp4>)"
    )

    references = scan_markdown(text)

    assert references.assets == ["/storage/brochure.pdf", "clips/intro.mp4"]


def test_media_type_ignores_query_strings() -> None:
    assert guess_media_type("https://cdn.example/file.pdf?v=2") == "application/pdf"
    assert is_asset_link("https://cdn.example/file.pdf?v=2")
    assert not is_asset_link("/page.html")
    assert not is_asset_link("/no-extension")


def test_empty_targets_are_skipped() -> None:
    references = scan_markdown("![]() [empty]()")

    assert references.images == []
    assert references.assets == []
