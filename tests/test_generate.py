# tests/test_generate.py

import pytest
import yaml

from scraper_autoconfig.config import FetcherConfig, GenerateConfig, MockPage
from scraper_autoconfig.generate import (
    EmptyURLError,
    NoFieldsFoundError,
    PageFetchError,
    generate_config,
)
from scraper_autoconfig.run_generate import main

URL = "https://example.com/events"

PAGE = (
    "<html><head><title>Events</title></head><body>"
    "<div class='list'>"
    "<div class='card'><h2 class='title'>First</h2><a class='more' href='/a'>Read</a></div>"
    "<div class='card'><h2 class='title'>Second</h2><a class='more' href='/b'>Read</a></div>"
    "</div>"
    "</body></html>"
)


def _config(min_occurrences=2):
    return GenerateConfig(
        min_occurrences=min_occurrences,
        fetcher=FetcherConfig(fetcher_type="mock", mock_pages=[MockPage(url=URL, content=PAGE)]),
    )


def test_generate_config_end_to_end():
    config = generate_config(URL, _config())

    assert config.url == URL
    assert config.item == "body > div.list > div.card"

    assert [(f.name, f.type) for f in config.fields] == [("field-0", "text"), ("field-1", "url")]
    title, link = (f.locations[0] for f in config.fields)
    assert (title.selector, title.attr, title.examples) == ("h2.title", "", ["First", "Second"])
    assert (link.selector, link.attr, link.examples) == ("a.more", "href", ["/a", "/b"])


def test_table_listing_selects_through_tbody():
    rows = "".join(
        f"<tr><td class='name'>Band {i}</td><td class='date'>0{i}.05.2024</td></tr>" for i in range(1, 4)
    )
    url = "https://example.com/table"
    config = GenerateConfig(
        min_occurrences=2,
        fetcher=FetcherConfig(
            fetcher_type="mock",
            mock_pages=[MockPage(url=url, content=f"<table class='events'>{rows}</table>")],
        ),
    )

    out = generate_config(url, config)

    assert out.item == "body > table.events > tbody > tr"
    assert [f.locations[0].selector for f in out.fields] == ["td.name", "td.date:nth-child(2)"]


def test_empty_url():
    with pytest.raises(EmptyURLError):
        generate_config("", _config())


def test_page_fetch_error():
    with pytest.raises(PageFetchError):
        generate_config("https://example.com/unknown", _config())


def test_no_fields_found():
    with pytest.raises(NoFieldsFoundError):
        generate_config(URL, _config(min_occurrences=5))


def _write_generate_file(tmp_path):
    path = tmp_path / "generate.yml"
    path.write_text(
        yaml.safe_dump(
            {
                "min_occurrences": 20,
                "fetcher": {"type": "mock", "mock_pages": [{"url": URL, "content": PAGE}]},
            }
        ),
        encoding="utf-8",
    )
    return path


def test_cli_writes_config(tmp_path):
    generate_file = _write_generate_file(tmp_path)
    output = tmp_path / "out" / "events.yml"

    code = main(
        ["--url", URL, "--config", str(generate_file), "--min-occurrences", "2", "--output", str(output)]
    )

    assert code == 0
    data = yaml.safe_load(output.read_text(encoding="utf-8"))
    scraper = data["scrapers"][0]
    assert scraper["item"] == "body > div.list > div.card"
    assert [f["name"] for f in scraper["fields"]] == ["field-0", "field-1"]


def test_cli_stdout(tmp_path, capsys):
    generate_file = _write_generate_file(tmp_path)

    code = main(["--url", URL, "--config", str(generate_file), "--min-occurrences", "2", "--stdout"])

    assert code == 0
    out = capsys.readouterr().out
    assert out.startswith("scrapers:")
    assert "# examples: [First, Second]" in out


def test_cli_reports_errors(tmp_path):
    generate_file = _write_generate_file(tmp_path)
    # min_occurrences from the file (20) is too high for two cards
    assert main(["--url", URL, "--config", str(generate_file), "--stdout"]) == 1
    assert main(["--url", URL, "--config", str(tmp_path / "missing.yml")]) == 1
