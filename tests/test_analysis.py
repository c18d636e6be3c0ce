import pytest

from a11y_scout.analysis.axe import AxeAnalyzer, load_axe_source
from a11y_scout.analysis.markup import MarkupAnalyzer
from a11y_scout.errors import AnalysisError, RenderError
from conftest import FakePage

GOOD_HTML = """
<html lang="en">
<head><title>Home</title></head>
<body>
  <img src="logo.png" alt="Logo">
  <img src="spacer.gif" role="presentation">
  <a href="/about">About</a>
  <a href="/home"><img src="home.png" alt="Home"></a>
  <a href="/x" aria-label="Close"></a>
  <button>Send</button>
</body>
</html>
"""

BAD_HTML = """
<html>
<head></head>
<body>
  <img src="a.png">
  <img src="b.png">
  <a href="/empty"></a>
  <button><span></span></button>
</body>
</html>
"""


def rule_ids(entries):
    return [entry["id"] for entry in entries]


def test_markup_clean_page_passes_all_rules():
    result = MarkupAnalyzer.check(GOOD_HTML, "https://example.com/")
    assert result["violations"] == []
    assert rule_ids(result["passes"]) == ["html-has-lang", "document-title", "image-alt", "link-name", "button-name"]
    assert result["url"] == "https://example.com/"


def test_markup_reports_each_violation():
    result = MarkupAnalyzer.check(BAD_HTML)
    violations = {v["id"]: v for v in result["violations"]}

    assert set(violations) == {"html-has-lang", "document-title", "image-alt", "link-name", "button-name"}
    assert len(violations["image-alt"]["nodes"]) == 2
    assert violations["image-alt"]["impact"] == "critical"
    assert violations["link-name"]["nodes"][0]["html"] == '<a href="/empty"></a>'
    assert result["passes"] == []


@pytest.mark.asyncio()
async def test_markup_analyzer_reads_page_content():
    page = FakePage("https://example.com/", html=GOOD_HTML)
    result = await MarkupAnalyzer().analyze(page)
    assert result["violations"] == []


@pytest.mark.asyncio()
async def test_markup_analyzer_rejects_empty_document():
    with pytest.raises(AnalysisError):
        await MarkupAnalyzer().analyze(FakePage("https://example.com/", html="   "))


@pytest.mark.asyncio()
async def test_axe_analyzer_injects_source_then_runs_tags():
    page = FakePage("https://example.com/")
    page.eval_results = [None, {"violations": [], "passes": []}]
    analyzer = AxeAnalyzer("/* axe */", tags=["wcag2a"])

    result = await analyzer.analyze(page)

    assert result == {"violations": [], "passes": []}
    assert page.scripts[0] == ("/* axe */", None)
    script, arg = page.scripts[1]
    assert "window.axe.run" in script
    assert arg == ["wcag2a"]


@pytest.mark.asyncio()
async def test_axe_analyzer_default_tags():
    assert AxeAnalyzer("").tags == ["wcag2a", "wcag2aa", "wcag2aaa"]


@pytest.mark.asyncio()
async def test_axe_analyzer_malformed_result():
    page = FakePage("https://example.com/")
    page.eval_results = [None, "not a dict"]
    with pytest.raises(AnalysisError, match="malformed"):
        await AxeAnalyzer("").analyze(page)


@pytest.mark.asyncio()
async def test_axe_analyzer_wraps_render_errors():
    page = FakePage("https://example.com/")
    page.eval_results = [RenderError(page.url, "script evaluation requires the browser renderer")]
    with pytest.raises(AnalysisError):
        await AxeAnalyzer("").analyze(page)


def test_load_axe_source(tmp_path, monkeypatch):
    script = tmp_path / "axe.min.js"
    script.write_text("window.axe = {};", encoding="utf-8")
    assert load_axe_source(script) == "window.axe = {};"

    monkeypatch.chdir(tmp_path)
    with pytest.raises(FileNotFoundError):
        load_axe_source()

    installed = tmp_path / "node_modules" / "axe-core"
    installed.mkdir(parents=True)
    (installed / "axe.min.js").write_text("// installed", encoding="utf-8")
    assert load_axe_source() == "// installed"
