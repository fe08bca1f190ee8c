# SPDX-License-Identifier: MIT
"""Tests for MediaWiki URL building and reply classification."""

import pytest

from feature_photos.config import SourceSettings
from feature_photos.connectors.protocols.mediawiki import (
    WikiReplyType,
    classify_wiki_reply,
    encode_component,
    extract_p18_filename,
    first_page,
    get_wiki_api_url,
    parse_wikipedia_tag,
)


class TestWikiApiUrl:
    """Test tag-to-URL selection."""

    def test_no_wiki_tags(self):
        assert get_wiki_api_url({"name": "Letná", "amenity": "cafe"}) is None

    def test_wikidata(self):
        """Wikidata image claims via wbgetclaims."""
        assert get_wiki_api_url({"wikidata": "Q243"}) == (
            "https://www.wikidata.org/w/api.php"
            "?action=wbgetclaims&property=P18&format=json&entity=Q243"
        )

    def test_wikimedia_commons(self):
        """Commons image info with a 640 px thumbnail."""
        assert get_wiki_api_url({"wikimedia_commons": "File:Tour Eiffel.jpg"}) == (
            "https://commons.wikimedia.org/w/api.php"
            "?action=query&prop=imageinfo&iiprop=url&iiurlwidth=640&format=json"
            "&titles=File%3ATour%20Eiffel.jpg"
        )

    def test_wikipedia_with_language(self):
        """The locale prefix selects the Wikipedia edition."""
        assert get_wiki_api_url({"wikipedia": "cs:Praha"}) == (
            "https://cs.wikipedia.org/w/api.php"
            "?action=query&prop=pageimages&pithumbsize=640&format=json&titles=Praha"
        )

    def test_wikipedia_defaults_to_english(self):
        url = get_wiki_api_url({"wikipedia": "Eiffel_Tower"})
        assert url.startswith("https://en.wikipedia.org/w/api.php?")
        assert url.endswith("&titles=Eiffel_Tower")

    def test_wikipedia_title_with_colon(self):
        """A colon inside the title is not mistaken for a language prefix."""
        assert get_wiki_api_url({"wikipedia": "Star Wars: A New Hope"}) == (
            "https://en.wikipedia.org/w/api.php"
            "?action=query&prop=pageimages&pithumbsize=640&format=json"
            "&titles=Star%20Wars%3A%20A%20New%20Hope"
        )

    def test_wikipedia_language_key(self):
        """Keys like wikipedia:de are accepted as well."""
        url = get_wiki_api_url({"wikipedia:de": "de:Eiffelturm"})
        assert url.startswith("https://de.wikipedia.org/")

    def test_wikidata_takes_priority(self):
        tags = {
            "wikipedia": "en:Eiffel Tower",
            "wikimedia_commons": "Category:Eiffel Tower",
            "wikidata": "Q243",
        }
        assert "wikidata.org" in get_wiki_api_url(tags)

    def test_commons_before_wikipedia(self):
        tags = {"wikipedia": "en:Eiffel Tower", "wikimedia_commons": "File:A.jpg"}
        assert "commons.wikimedia.org" in get_wiki_api_url(tags)

    def test_empty_wikidata_value_ignored(self):
        assert "commons.wikimedia.org" in get_wiki_api_url({"wikidata": "", "wikimedia_commons": "File:A.jpg"})

    def test_custom_thumb_width(self):
        config = SourceSettings(thumb_width=320)
        assert "&pithumbsize=320&" in get_wiki_api_url({"wikipedia": "Praha"}, config)


class TestEncoding:
    """Test query value encoding."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("Tour Eiffel", "Tour%20Eiffel"),
            ("File:A&B.jpg", "File%3AA%26B.jpg"),
            ("Chrám sv. Víta", "Chr%C3%A1m%20sv.%20V%C3%ADta"),
            ("it's (here)!", "it's%20(here)!"),
            ("a/b", "a%2Fb"),
        ],
    )
    def test_encode_component(self, value, expected):
        assert encode_component(value) == expected

    def test_parse_wikipedia_tag(self):
        assert parse_wikipedia_tag("fr:Tour Eiffel") == ("fr", "Tour Eiffel")
        assert parse_wikipedia_tag("Tour Eiffel") == ("en", "Tour Eiffel")
        assert parse_wikipedia_tag("Tour Eiffel", default_lang="cs") == ("cs", "Tour Eiffel")
        assert parse_wikipedia_tag("zh-min-nan:Pa-lê") == ("zh-min-nan", "Pa-lê")
        assert parse_wikipedia_tag("Star Wars: A New Hope") == ("en", "Star Wars: A New Hope")
        assert parse_wikipedia_tag("EN:Paris") == ("en", "EN:Paris")


class TestReplyClassification:
    """Test wiki reply detection."""

    def test_wikidata(self, wikidata_reply):
        assert classify_wiki_reply(wikidata_reply) == WikiReplyType.WIKIDATA

    def test_wikimedia(self, commons_reply):
        assert classify_wiki_reply(commons_reply) == WikiReplyType.WIKIMEDIA

    def test_wikipedia(self, wikipedia_reply):
        assert classify_wiki_reply(wikipedia_reply) == WikiReplyType.WIKIPEDIA

    def test_list_form_pages(self):
        """formatversion=2 replies carry pages as a list."""
        data = {"query": {"pages": [{"pageimage": "A.jpg", "thumbnail": {"source": "x"}}]}}
        assert classify_wiki_reply(data) == WikiReplyType.WIKIPEDIA

    @pytest.mark.parametrize("data", [None, [], {}, {"query": {"pages": {}}}, {"error": {"code": "x"}}])
    def test_unknown(self, data):
        assert classify_wiki_reply(data) is None

    def test_first_page_missing(self):
        assert first_page({"batchcomplete": ""}) is None

    def test_extract_p18_filename(self, wikidata_reply):
        assert extract_p18_filename(wikidata_reply) == "Tour Eiffel.jpg"

    def test_extract_p18_filename_without_value(self):
        """A claim with no value (snaktype novalue) has no file name."""
        data = {"claims": {"P18": [{"mainsnak": {"snaktype": "novalue"}}]}}
        assert extract_p18_filename(data) is None
