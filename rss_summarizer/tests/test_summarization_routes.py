"""
Tests for POST /api/summarize.

Pages come from the fake fetcher and summaries from the mock provider, so
these run without network access or an API key.
"""

from rss_summarizer.summarizer import ARTICLE_PROMPT, COMMENTS_PROMPT


ARTICLE_URL = "https://example.com/rust"
ITEM_URL = "https://news.ycombinator.com/item?id=111"


class TestValidation:
    """Requests with nothing to summarize."""

    def test_empty_body_returns_400_without_network(self, client, fake_fetcher, mock_provider):
        response = client.post("/api/summarize", json={})

        assert response.status_code == 400
        assert "error" in response.json()
        assert fake_fetcher.calls == []
        assert mock_provider.calls == []

    def test_blank_fields_count_as_missing(self, client, fake_fetcher):
        response = client.post("/api/summarize", json={"text": "   ", "url": "", "itemUrl": None})

        assert response.status_code == 400
        assert fake_fetcher.calls == []

    def test_missing_api_key_returns_500_without_network(self, client_without_llm, fake_fetcher):
        response = client_without_llm.post("/api/summarize", json={"url": ARTICLE_URL})

        assert response.status_code == 500
        assert "not configured" in response.json()["error"]
        assert fake_fetcher.calls == []


class TestArticleSummary:
    """Article-only requests."""

    def test_summarizes_article_url(self, client, fake_fetcher, mock_provider, article_html):
        fake_fetcher.add_page(ARTICLE_URL, article_html)
        mock_provider.queue_response("Rust lands in more kernel subsystems.")

        response = client.post("/api/summarize", json={"url": ARTICLE_URL})

        assert response.status_code == 200
        assert response.json() == {"articleSummary": "Rust lands in more kernel subsystems."}
        assert mock_provider.calls[0]["system_prompt"] == ARTICLE_PROMPT
        assert "Rust abstractions" in mock_provider.calls[0]["user_prompt"]

    def test_accepts_article_url_alias(self, client, fake_fetcher, article_html):
        fake_fetcher.add_page(ARTICLE_URL, article_html)

        response = client.post("/api/summarize", json={"articleUrl": ARTICLE_URL})

        assert response.status_code == 200
        assert "articleSummary" in response.json()

    def test_literal_text_skips_fetch(self, client, fake_fetcher, mock_provider):
        response = client.post("/api/summarize", json={"text": "Some pasted article text."})

        assert response.status_code == 200
        assert response.json()["articleSummary"] == "Mock summary."
        assert fake_fetcher.calls == []
        assert "Some pasted article text." in mock_provider.calls[0]["user_prompt"]

    def test_fetch_failure_reports_error(self, client):
        response = client.post("/api/summarize", json={"url": "https://down.example/"})

        assert response.status_code == 500
        body = response.json()
        assert "articleSummary" not in body
        assert body["error"] == "Failed to generate summaries."
        assert "ENOTFOUND" in body["details"]["articleError"]
        assert "commentError" not in body["details"]

    def test_non_html_content_is_unusable(self, client, fake_fetcher, mock_provider):
        fake_fetcher.add_page(ARTICLE_URL, "%PDF-1.7", content_type="application/pdf")

        response = client.post("/api/summarize", json={"url": ARTICLE_URL})

        assert response.status_code == 500
        assert "content type" in response.json()["details"]["articleError"]
        assert mock_provider.calls == []

    def test_unextractable_page(self, client, fake_fetcher, mock_provider):
        fake_fetcher.add_page(ARTICLE_URL, "<html><body><nav>Menu</nav></body></html>")

        response = client.post("/api/summarize", json={"url": ARTICLE_URL})

        assert response.status_code == 500
        assert "readable content" in response.json()["details"]["articleError"]
        assert mock_provider.calls == []


class TestCommentSummary:
    """Discussion-thread requests."""

    def test_summarizes_comments(self, client, fake_fetcher, mock_provider, comments_html):
        fake_fetcher.add_page(ITEM_URL, comments_html)
        mock_provider.queue_response("Readers are split on maintenance cost.")

        response = client.post("/api/summarize", json={"itemUrl": ITEM_URL})

        assert response.status_code == 200
        assert response.json() == {"commentSummary": "Readers are split on maintenance cost."}
        call = mock_provider.calls[0]
        assert call["system_prompt"] == COMMENTS_PROMPT
        assert "\n\n---\n\n" in call["user_prompt"]

    def test_thread_without_comments(self, client, fake_fetcher):
        fake_fetcher.add_page(ITEM_URL, "<html><body>No comments yet.</body></html>")

        response = client.post("/api/summarize", json={"itemUrl": ITEM_URL})

        assert response.status_code == 500
        assert response.json()["details"]["commentError"] == "No comments found"


class TestPartialAggregation:
    """Article and comment sources fail independently."""

    def test_both_succeed(self, client, fake_fetcher, article_html, comments_html):
        fake_fetcher.add_page(ARTICLE_URL, article_html)
        fake_fetcher.add_page(ITEM_URL, comments_html)

        response = client.post("/api/summarize", json={"url": ARTICLE_URL, "itemUrl": ITEM_URL})

        assert response.status_code == 200
        body = response.json()
        assert body["articleSummary"] == "Mock summary."
        assert body["commentSummary"] == "Mock summary."
        assert "error" not in body
        assert sorted(fake_fetcher.calls) == sorted([ARTICLE_URL, ITEM_URL])

    def test_article_fails_comments_succeed(self, client, fake_fetcher, comments_html):
        fake_fetcher.add_page(ITEM_URL, comments_html)

        response = client.post("/api/summarize", json={"url": "https://down.example/", "itemUrl": ITEM_URL})

        assert response.status_code == 200
        body = response.json()
        assert body == {"commentSummary": "Mock summary."}

    def test_comments_fail_article_succeeds(self, client, fake_fetcher, article_html):
        fake_fetcher.add_page(ARTICLE_URL, article_html)

        response = client.post("/api/summarize", json={"url": ARTICLE_URL, "itemUrl": ITEM_URL})

        assert response.status_code == 200
        assert response.json() == {"articleSummary": "Mock summary."}

    def test_both_fail(self, client):
        response = client.post(
            "/api/summarize",
            json={"url": "https://down.example/", "itemUrl": "https://down.example/item"},
        )

        assert response.status_code == 500
        details = response.json()["details"]
        assert details["articleError"]
        assert details["commentError"]


class TestUnexpectedErrors:
    """Errors outside the pipeline's taxonomy become a generic 500."""

    def test_unexpected_exception_returns_500(self, client, fake_fetcher):
        fake_fetcher.add_error(ARTICLE_URL, RuntimeError("parser exploded"))

        response = client.post("/api/summarize", json={"url": ARTICLE_URL})

        assert response.status_code == 500
        assert response.json() == {"error": "parser exploded"}


class TestMalformedInput:
    """Bodies and URLs that cannot be used as given."""

    def test_wrongly_typed_field_returns_400(self, client, fake_fetcher, mock_provider):
        response = client.post("/api/summarize", json={"url": 123})

        assert response.status_code == 400
        assert "error" in response.json()
        assert fake_fetcher.calls == []
        assert mock_provider.calls == []

    def test_non_json_body_returns_400(self, client, fake_fetcher):
        response = client.post(
            "/api/summarize",
            content=b"not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert "error" in response.json()
        assert fake_fetcher.calls == []

    def test_malformed_article_url_keeps_comment_summary(self, client, fake_fetcher, comments_html):
        fake_fetcher.add_page(ITEM_URL, comments_html)

        response = client.post(
            "/api/summarize",
            json={"url": "http://example.com:99999/", "itemUrl": ITEM_URL},
        )

        assert response.status_code == 200
        assert response.json() == {"commentSummary": "Mock summary."}

    def test_malformed_url_alone_is_a_source_error(self, client):
        response = client.post("/api/summarize", json={"url": "http://[::1/x"})

        assert response.status_code == 500
        assert "Invalid URL" in response.json()["details"]["articleError"]

    def test_non_html_thread_is_unusable(self, client, fake_fetcher, mock_provider):
        fake_fetcher.add_page(ITEM_URL, '{"comments": []}', content_type="application/json")

        response = client.post("/api/summarize", json={"itemUrl": ITEM_URL})

        assert response.status_code == 500
        assert "content type" in response.json()["details"]["commentError"]
        assert mock_provider.calls == []
