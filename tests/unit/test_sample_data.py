from newsdesk.tools.sample_data import SAMPLE_DATA_PATH, load_sample_articles


def test_bundled_sample_file_has_articles() -> None:
    assert SAMPLE_DATA_PATH.exists()
    articles = load_sample_articles()
    assert len(articles) > 0
    assert all("url" in a and "title" in a for a in articles)


def test_reads_custom_path(tmp_path) -> None:
    path = tmp_path / "sample.json"
    path.write_text('{"articles": [{"url": "https://example.com/x", "title": "X"}]}', encoding="utf-8")

    assert load_sample_articles(path) == [{"url": "https://example.com/x", "title": "X"}]


def test_missing_file_returns_empty_list(tmp_path) -> None:
    assert load_sample_articles(tmp_path / "nope.json") == []


def test_corrupt_file_returns_empty_list(tmp_path) -> None:
    path = tmp_path / "sample.json"
    path.write_text("{not json", encoding="utf-8")

    assert load_sample_articles(path) == []


def test_payload_without_article_list_returns_empty_list(tmp_path) -> None:
    path = tmp_path / "sample.json"
    path.write_text('{"articles": "oops"}', encoding="utf-8")

    assert load_sample_articles(path) == []


def test_file_is_read_on_every_call(tmp_path) -> None:
    path = tmp_path / "sample.json"
    path.write_text('{"articles": [{"url": "a"}]}', encoding="utf-8")
    assert load_sample_articles(path) == [{"url": "a"}]

    path.write_text('{"articles": [{"url": "b"}]}', encoding="utf-8")
    assert load_sample_articles(path) == [{"url": "b"}]
