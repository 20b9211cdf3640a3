import pytest

from wcag_inspector.criteria import (
    CRITERIA,
    PageContext,
    accessible_authentication_enhanced,
    accessible_authentication_minimum,
    audio_video,
    bypass_blocks,
    consistent_help,
    contrast_minimum,
    error_identification,
    evaluate_all,
    focus_appearance,
    focus_not_obscured_enhanced,
    focus_not_obscured_minimum,
    focus_visible,
    info_relationships,
    language_of_page,
    link_purpose,
    non_text_content,
    page_titled,
    parse_document,
    principle_for,
    redundant_entry,
    target_size,
    use_of_color,
)

EMPTY_PAGE = "<html><head></head><body></body></html>"

# Markup that trips as many heuristics as possible at once.
HOSTILE_PAGE = """
<html><head>
<style>a { color: #fff; outline: none; animation: spin 1s; }</style>
<meta http-equiv="refresh" content="5">
</head><body>
<div onclick="go()"></div>
<span class="blink">new</span>
<span role="button"></span>
<img src="banner.png">
<video src="clip.mp4"></video>
<a href="#">click here</a>
<p style="font-size: 12px" tabindex="3">tiny</p>
<div draggable="true">drag me</div>
<form class="wizard"><div class="step"><input name="q"><input type="password"></div></form>
<div class="g-captcha"></div>
<table><tr><td>1</td></tr></table>
<select onchange="nav()"></select>
<nav><a href="/help">Help</a></nav><footer><p><a href="/support">Support</a></p></footer>
</body></html>
"""


def run(check, html, url="https://example.com/", **ctx):
    return check(parse_document(html), PageContext(url=url, **ctx))


def test_registry_holds_27_unique_criteria_in_report_order():
    ids = [cid for cid, _ in CRITERIA]
    assert len(ids) == 27
    assert len(set(ids)) == 27
    assert ids[:9] == ["2.4.11", "2.4.12", "2.4.13", "2.5.7", "2.5.8", "3.2.6", "3.3.7", "3.3.8", "3.3.9"]
    assert ids[-1] == "4.1.2"


@pytest.mark.parametrize("html", [EMPTY_PAGE, "", HOSTILE_PAGE])
def test_every_result_has_at_least_one_element(html):
    results = evaluate_all(parse_document(html), PageContext(url="https://example.com/"))
    assert [r.criterion_id for r in results] == [cid for cid, _ in CRITERIA]
    for r in results:
        assert len(r.elements) >= 1, r.criterion_id


def test_results_carry_principle_and_version():
    results = {r.criterion_id: r for r in evaluate_all(parse_document(EMPTY_PAGE), PageContext(url="https://example.com/"))}
    assert results["1.1.1"].principle == "Perceivable"
    assert results["2.4.2"].principle == "Operable"
    assert results["3.1.1"].principle == "Understandable"
    assert results["4.1.2"].principle == "Robust"
    assert results["2.5.8"].wcag_version == "WCAG 2.2"
    assert results["1.1.1"].wcag_version == "WCAG 2.0"


def test_principle_for_unknown_prefix():
    assert principle_for("9.9.9") is None


def test_hostile_page_fails_most_checks():
    results = evaluate_all(parse_document(HOSTILE_PAGE), PageContext(url="https://example.com/"))
    failed = {r.criterion_id for r in results if not r.passed}
    assert {"1.1.1", "1.2.1", "1.3.1", "1.4.3", "1.4.4", "2.1.1", "2.2.1", "2.3.1", "2.4.3", "2.4.4",
            "2.4.7", "2.5.7", "3.1.1", "3.2.1", "3.2.6", "3.3.1", "3.3.7", "3.3.8", "3.3.9", "4.1.2"} <= failed
    for r in results:
        if not r.passed:
            assert r.how_to_fix


@pytest.mark.parametrize("check", [focus_not_obscured_minimum, focus_appearance, target_size])
def test_rendering_dependent_checks_always_pass(check):
    result = run(check, HOSTILE_PAGE)
    assert result.passed
    assert result.how_to_fix is None


def test_use_of_color_passes_but_keeps_guidance():
    result = run(use_of_color, HOSTILE_PAGE)
    assert result.passed
    assert result.how_to_fix.startswith("Ensure color is not the only visual means")


def test_images_without_alt_are_listed():
    result = run(non_text_content, '<img src="a.png"><img alt="" src="b.png"><img>')
    assert not result.passed
    assert [e.element for e in result.elements] == ['img[src="a.png"]', "img"]
    assert all(e.issue == "Missing alt attribute" for e in result.elements)


def test_images_with_alt_pass():
    result = run(non_text_content, '<img src="a.png" alt="Logo">')
    assert result.passed
    assert result.elements[0].element == "Images"
    assert result.elements[0].issue is None


def test_light_text_in_inline_styles_flags_contrast():
    assert not run(contrast_minimum, "<style>p { color: #fff; }</style>").passed
    assert not run(contrast_minimum, "<style>p { color: rgb(255, 250, 250); }</style>").passed
    assert run(contrast_minimum, "<style>p { color: #333; }</style>").passed
    assert run(contrast_minimum, EMPTY_PAGE).passed


def test_bypass_blocks_skip_link_or_landmark():
    assert run(bypass_blocks, '<a href="#main">Skip to content</a>').passed
    assert run(bypass_blocks, "<main>content</main>").passed
    failed = run(bypass_blocks, EMPTY_PAGE)
    assert not failed.passed
    assert [e.is_passed for e in failed.elements] == [False, False]


def test_bypass_blocks_trusts_self_hostnames():
    result = run(bypass_blocks, EMPTY_PAGE, url="http://localhost:5000/")
    assert result.passed
    assert [e.element for e in result.elements] == ["Skip links", "Landmark regions"]

    custom = run(bypass_blocks, EMPTY_PAGE, url="https://mysite.test/", self_hostnames=frozenset({"mysite.test"}))
    assert custom.passed
    assert not run(bypass_blocks, EMPTY_PAGE, url="http://localhost/", self_hostnames=frozenset()).passed


def test_bypass_blocks_trusts_self_hostname_subdomains_only():
    assert run(bypass_blocks, EMPTY_PAGE, url="https://www.wcag.halans.dev/").passed
    assert not run(bypass_blocks, EMPTY_PAGE, url="https://notwcag.halans.dev/").passed
    assert not run(bypass_blocks, EMPTY_PAGE, url="https://evil.example/?localhost").passed


def test_page_title_is_echoed():
    result = run(page_titled, "<title> Test </title>")
    assert result.passed
    assert result.findings == 'The page has a title: "Test"'
    assert not run(page_titled, "<title>   </title>").passed


def test_language_of_page():
    assert run(language_of_page, '<html lang="en"><body></body></html>').passed
    assert "lang=\"en\"" in run(language_of_page, '<html lang="en"></html>').findings
    assert not run(language_of_page, "<html><body></body></html>").passed


def test_focus_outline_removal():
    assert not run(focus_visible, "<style>a:focus{outline:none}</style>").passed
    assert not run(focus_visible, "<style>a:focus { outline: 0 }</style>").passed
    assert run(focus_visible, "<style>a:focus { outline: 2px solid }</style>").passed


def test_focus_not_obscured_enhanced_needs_focus_styles():
    styled = run(focus_not_obscured_enhanced, "<style>button:focus-visible { outline: 2px solid; }</style><button>Go</button>")
    assert styled.passed
    assert styled.elements[0].element == "Interactive elements"

    unstyled = run(focus_not_obscured_enhanced, "<button>Go</button>")
    assert not unstyled.passed
    assert [(e.element, e.is_passed) for e in unstyled.elements] == [("Interactive elements", True)]

    nothing = run(focus_not_obscured_enhanced, EMPTY_PAGE)
    assert nothing.elements[0].element == "No interactive elements found"


def test_gradient_buttons_override_focus_styles():
    html = '<style>:focus { outline: 2px solid; }</style><button class="btn gradient-primary">Buy</button>'
    result = run(focus_not_obscured_enhanced, html)
    assert not result.passed
    assert result.elements[0].element == "button.btn.gradient-primary"
    assert result.elements[0].is_passed is False


def test_info_relationships_labels_and_tables():
    assert run(info_relationships, '<form><label for="e">Email</label><input id="e"></form>').passed
    assert run(info_relationships, '<form><input aria-label="Search"></form>').passed
    assert run(info_relationships, '<form><input aria-labelledby="search-label"></form>').passed
    assert not run(info_relationships, '<form><input name="q"></form>').passed
    assert not run(info_relationships, '<form><input aria-label=""></form>').passed
    assert not run(info_relationships, "<form><input aria-labelledby></form>").passed
    assert not run(info_relationships, "<table><tr><td>1</td></tr></table>").passed
    assert run(info_relationships, "<table><tr><th>h</th></tr></table>").passed


def test_error_identification():
    no_forms = run(error_identification, EMPTY_PAGE)
    assert no_forms.passed
    assert no_forms.elements[0].element == "No forms found"
    assert not run(error_identification, '<form><input name="q"></form>').passed
    assert run(error_identification, '<form><input name="q" required></form>').passed


def test_link_purpose():
    assert not run(link_purpose, '<a href="/x">click here</a>').passed
    assert not run(link_purpose, '<a href="#">Home</a>').passed
    assert run(link_purpose, '<a href="/pricing">Pricing</a>').passed


def test_consistent_help():
    assert run(consistent_help, EMPTY_PAGE).elements[0].element == "No help mechanisms found"
    assert run(consistent_help, '<nav><a href="/help">Help</a><a href="/support">Support</a></nav>').passed
    assert not run(consistent_help, '<nav><a href="/help">Help</a></nav><p><a href="/s">Support</a></p>').passed


def test_authentication_captcha_and_alternatives():
    login = '<form><input type="password"></form><div class="captcha"></div>'
    assert not run(accessible_authentication_minimum, login).passed
    assert not run(accessible_authentication_enhanced, login).passed

    with_sso = login + "<button>Sign in with Google</button>"
    assert run(accessible_authentication_minimum, with_sso).passed
    assert not run(accessible_authentication_enhanced, with_sso).passed

    plain = '<form><input type="password"></form>'
    assert run(accessible_authentication_minimum, plain).passed
    assert run(accessible_authentication_enhanced, plain).passed
    assert run(accessible_authentication_minimum, EMPTY_PAGE).elements[0].element == "No authentication forms found"


def test_captcha_without_login_form_fails_with_placeholder_element():
    html = '<div class="captcha"></div>'
    for check in (accessible_authentication_minimum, accessible_authentication_enhanced):
        result = run(check, html)
        assert not result.passed
        assert result.findings == "No authentication methods were found on the page."
        assert [(e.element, e.is_passed) for e in result.elements] == [("No authentication forms found", True)]


def test_multimedia_with_captions_passes():
    result = run(audio_video, '<video src="clip.mp4"><track kind="captions" src="en.vtt"></video>')
    assert result.passed
    assert result.findings == "Multimedia content appears to have captions or alternatives."
    assert result.elements[0].is_passed
    assert not run(audio_video, '<video src="clip.mp4"></video>').passed


def test_redundant_entry_with_save_control_passes():
    wizard = '<form class="wizard"><div class="step"><input name="q"></div>{}</form>'
    assert run(redundant_entry, wizard.format("<button>Save progress</button>")).passed
    assert run(redundant_entry, wizard.format('<input type="submit" value="Save">')).passed
    assert not run(redundant_entry, wizard.format("<button>Next</button>")).passed


def test_help_links_under_one_parent_are_consistent():
    result = run(consistent_help, '<footer><a href="/help">Help</a> | <a href="/support">Support</a></footer>')
    assert result.passed
    assert [(e.element, e.is_passed) for e in result.elements] == [("Help links", True)]


def test_checks_do_not_mutate_the_document():
    soup = parse_document(HOSTILE_PAGE)
    before = str(soup)
    evaluate_all(soup, PageContext(url="https://example.com/"))
    assert str(soup) == before
