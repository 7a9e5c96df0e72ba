# uiplan/synthesizer.py
# Ordered decision table from feature flags to canonical plan templates.
# The first matching rule wins; rules run from most to least specific.
import logging
import re
from typing import Callable, List, NamedTuple, Tuple

from uiplan.blueprint import Blueprint, build_tree, component, container, layout
from uiplan.content import DEFAULT_CONTENT, TemplateContent
from uiplan.intent import FeatureFlags, IntentAnalysis
from uiplan.schema import Plan

logger = logging.getLogger(__name__)


class TemplateRule(NamedTuple):
    name: str
    predicate: Callable[[FeatureFlags], bool]
    build: Callable[[IntentAnalysis, TemplateContent], Blueprint]


class FormField(NamedTuple):
    label: str
    type: str
    placeholder: str


# === Form field detection ===
FIELD_PATTERNS: Tuple[Tuple[re.Pattern, FormField], ...] = (
    (re.compile(r"\be-?mail\b", re.I), FormField("Email", "email", "Enter email")),
    (re.compile(r"\bpassword\b", re.I), FormField("Password", "password", "Enter password")),
    (re.compile(r"\busername\b|\buser\s+name\b", re.I), FormField("Username", "text", "Enter username")),
    (re.compile(r"\bconfirm\s+password\b|\bre-enter\s+password\b", re.I),
     FormField("Confirm Password", "password", "Confirm password")),
    (re.compile(r"\bfull\s+name\b|(?<!user\s)\bname\b", re.I), FormField("Full Name", "text", "Enter full name")),
    (re.compile(r"\bphone\b", re.I), FormField("Phone", "tel", "Enter phone number")),
    (re.compile(r"\bsearch\b", re.I), FormField("Search", "text", "Search...")),
    (re.compile(r"\baddress\b", re.I), FormField("Address", "text", "Enter address")),
    (re.compile(r"\bcomments?\b|\bmessages?\b|\bfeedback\b", re.I), FormField("Message", "text", "Enter message")),
)

LOGIN_RE = re.compile(r"\blog\s?in\b|\bsign\s+in\b", re.I)
SIGNUP_RE = re.compile(r"\bsign\s?up\b|\bregister\b", re.I)

LOGIN_FIELDS = (
    FormField("Email", "email", "Enter email"),
    FormField("Password", "password", "Enter password"),
)
SIGNUP_FIELDS = (
    FormField("Email", "email", "Enter email"),
    FormField("Username", "text", "Enter username"),
    FormField("Password", "password", "Enter password"),
    FormField("Confirm Password", "password", "Confirm password"),
)


def parse_form_fields(text: str) -> List[FormField]:
    fields = [f for pattern, f in FIELD_PATTERNS if pattern.search(text)]
    if not fields and LOGIN_RE.search(text):
        fields = list(LOGIN_FIELDS)
    if not fields and SIGNUP_RE.search(text):
        fields = list(SIGNUP_FIELDS)
    return fields


# === Shared pieces ===
def _card(title, *children, padding=16):
    return component("Card", *children, title=title, padding=padding)


def _chart(content, title, series, chart_type="bar"):
    return component("Chart", title=title, data=content.series(series), type=chart_type)


def _table(content, name, rows=None):
    data = content.table(name, rows)
    return component("Table", columns=data["columns"], data=data["data"])


def _button(label):
    return component("Button", label=label, variant="primary")


def _sidebar(content):
    return component("Sidebar", width=content.sidebar_width)


def _optional_card(title_on, title_off, child, enabled):
    """Card that always carries a children list, filled only when its content was requested."""
    return container("Card", [child] if enabled else [], title=title_on if enabled else title_off, padding=16)


# === Layout templates ===
def sidebar_navbar_two_columns(analysis: IntentAnalysis, content: TemplateContent) -> Blueprint:
    flags = analysis.flags
    return layout(
        "RowLayout",
        _sidebar(content),
        layout(
            "ColumnLayout",
            component("Navbar", title="Dashboard"),
            layout(
                "RowLayout",
                _optional_card("Analytics", "Left Panel", _chart(content, "Performance", "monthly"), flags.chart),
                _optional_card("Data", "Right Panel", _table(content, "items", rows=2), flags.table),
                gap=16, padding=24,
            ),
            gap=0, padding=0,
        ),
        gap=0, padding=0,
    )


def sidebar_two_columns(analysis: IntentAnalysis, content: TemplateContent) -> Blueprint:
    flags = analysis.flags
    return layout(
        "RowLayout",
        _sidebar(content),
        layout(
            "ColumnLayout",
            layout(
                "RowLayout",
                _optional_card("Analytics", "Data", _chart(content, "Performance", "monthly_extended"), flags.chart),
                _optional_card("Recent Data", "Content", _table(content, "items"), flags.table),
                gap=16, padding=24,
            ),
            gap=0, padding=0,
        ),
        gap=0, padding=0,
    )


def sidebar_dashboard(analysis: IntentAnalysis, content: TemplateContent) -> Blueprint:
    return layout(
        "RowLayout",
        _sidebar(content),
        layout(
            "ColumnLayout",
            _card("Dashboard Overview", _chart(content, "Metrics", "weekly", "line")),
            _card("Details", _table(content, "metrics")),
            gap=16, padding=24,
        ),
        gap=0, padding=0,
    )


def sidebar_only(analysis: IntentAnalysis, content: TemplateContent) -> Blueprint:
    if analysis.flags.navbar:
        main = (component("Navbar", title="App"), _card("Content", _button("Get Started")))
    else:
        main = (_card(content.default_title, _button("Start")),)
    return layout(
        "RowLayout",
        _sidebar(content),
        layout("ColumnLayout", *main, gap=16, padding=24),
        gap=0, padding=0,
    )


def navbar_chart_table(analysis: IntentAnalysis, content: TemplateContent) -> Blueprint:
    return layout(
        "ColumnLayout",
        component("Navbar", title="Dashboard"),
        layout(
            "RowLayout",
            _card("Analytics", _chart(content, "Performance", "quarterly")),
            _card("Data", _table(content, "records", rows=2)),
            gap=16, padding=24,
        ),
        gap=0, padding=0,
    )


def navbar_two_columns(analysis: IntentAnalysis, content: TemplateContent) -> Blueprint:
    flags = analysis.flags
    return layout(
        "ColumnLayout",
        component("Navbar", title="App"),
        layout(
            "RowLayout",
            _optional_card("Analytics", "Left Panel", _chart(content, "Trends", "categories", "pie"), flags.chart),
            _optional_card("Table Data", "Right Panel", _table(content, "tasks"), flags.table),
            gap=16, padding=24,
        ),
        gap=0, padding=0,
    )


def navbar_dashboard(analysis: IntentAnalysis, content: TemplateContent) -> Blueprint:
    return layout(
        "ColumnLayout",
        component("Navbar", title="Dashboard"),
        layout(
            "ColumnLayout",
            _card("Overview", _chart(content, "Performance", "daily", "line")),
            gap=16, padding=24,
        ),
        gap=0, padding=0,
    )


def navbar_only(analysis: IntentAnalysis, content: TemplateContent) -> Blueprint:
    return layout(
        "ColumnLayout",
        component("Navbar", title="App"),
        _card("Content", _button("Get Started"), padding=24),
        gap=0, padding=0,
    )


def two_columns_chart_table(analysis: IntentAnalysis, content: TemplateContent) -> Blueprint:
    return layout(
        "ColumnLayout",
        layout(
            "RowLayout",
            _card("Chart", _chart(content, "Data Visualization", "quarterly")),
            _card("Table", _table(content, "records")),
            gap=16, padding=0,
        ),
        gap=16, padding=24,
    )


def two_columns(analysis: IntentAnalysis, content: TemplateContent) -> Blueprint:
    left = _chart(content, "Analytics", "split", "pie") if analysis.flags.chart else _button("Action")
    return layout(
        "RowLayout",
        _card("Left Panel", left),
        _card("Right Panel", _button("Submit")),
        gap=16, padding=24,
    )


def dashboard(analysis: IntentAnalysis, content: TemplateContent) -> Blueprint:
    return layout(
        "RowLayout",
        _sidebar(content),
        layout(
            "ColumnLayout",
            _card("Dashboard", _chart(content, "Performance", "dashboard")),
            gap=16, padding=24,
        ),
        gap=0, padding=0,
    )


def _single(child: Blueprint, gap=16, padding=24) -> Blueprint:
    return layout("ColumnLayout", child, gap=gap, padding=padding)


def modal(analysis, content):
    return _single(component("Modal", isOpen=False, title="Modal"))


# === Archetype templates ===
def product_card(analysis, content):
    return _single(_card(
        "Product",
        _card("Image", padding=12),
        _card("Product Name", padding=12),
        _card("$99.99", padding=12),
        _button("Buy Now"),
    ))


def profile_card(analysis, content):
    return _single(_card(
        "Profile",
        _card("Avatar Placeholder", padding=12),
        _card("Name", padding=8),
        _card("Contact Info", padding=8),
        _button("View Profile"),
    ))


def stat_card(analysis, content):
    return _single(_card(
        "Statistics",
        _card("Metric 1: 1,234", padding=12),
        _card("Metric 2: 5,678", padding=12),
        _card("Metric 3: 9,012", padding=12),
    ))


def hero(analysis, content):
    return _single(_card(
        "Hero Section",
        _card("Main Heading"),
        _card("Subheading or Description"),
        _button("Call to Action"),
        padding=48,
    ), padding=0)


def gallery(analysis, content):
    items = [_card(f"Item {n}", padding=12) for n in range(1, content.gallery_size + 1)]
    return layout("GridLayout", *items, gap=16, padding=24, columns=3)


def testimonial(analysis, content):
    return _single(_card(
        "Testimonial",
        _card("Review Text", padding=12),
        _card("- Author Name", padding=8),
    ))


def pricing(analysis, content):
    return _single(_card(
        "Pricing Plan",
        _card("Standard - $49/month", padding=12),
        _card("Features included", padding=12),
        _button("Subscribe"),
    ))


def search_bar(analysis, content):
    return _single(_card(
        "Search",
        component("Input", label="Search", type="text", placeholder="Search..."),
        _button("Search"),
    ))


def item_card(analysis, content):
    return _single(_card("Item", _card("Item Details", padding=12), _button("View Details")))


def form(analysis: IntentAnalysis, content: TemplateContent) -> Blueprint:
    text = analysis.text
    fields = parse_form_fields(text)
    if LOGIN_RE.search(text):
        title = "Login"
    elif SIGNUP_RE.search(text):
        title = "Register"
    else:
        title = "Form"

    children = [component("Input", label=f.label, type=f.type, placeholder=f.placeholder) for f in fields]
    if children:
        children.append(_button("Login" if LOGIN_RE.search(text) else "Submit"))
    return _single(_card(title, *children))


def table(analysis, content):
    return _single(_card("Data Table"))


def default(analysis: IntentAnalysis, content: TemplateContent) -> Blueprint:
    return _single(_card(content.default_title))


def minimal(analysis: IntentAnalysis, content: TemplateContent) -> Blueprint:
    """One titled card, no grandchildren."""
    return _single(_card(analysis.title or content.default_title))


TEMPLATE_RULES: Tuple[TemplateRule, ...] = (
    TemplateRule("sidebar_navbar_two_columns", lambda f: f.sidebar and f.navbar and f.two_columns,
                 sidebar_navbar_two_columns),
    TemplateRule("sidebar_two_columns", lambda f: f.sidebar and f.two_columns, sidebar_two_columns),
    TemplateRule("sidebar_dashboard", lambda f: f.sidebar and f.dashboard, sidebar_dashboard),
    TemplateRule("sidebar", lambda f: f.sidebar, sidebar_only),
    TemplateRule("navbar_chart_table", lambda f: f.navbar and f.two_columns and f.chart and f.table,
                 navbar_chart_table),
    TemplateRule("navbar_two_columns", lambda f: f.navbar and f.two_columns, navbar_two_columns),
    TemplateRule("navbar_dashboard", lambda f: f.navbar and f.dashboard, navbar_dashboard),
    TemplateRule("navbar", lambda f: f.navbar, navbar_only),
    TemplateRule("two_columns_chart_table", lambda f: f.two_columns and f.chart and f.table,
                 two_columns_chart_table),
    TemplateRule("two_columns", lambda f: f.two_columns, two_columns),
    TemplateRule("dashboard", lambda f: f.dashboard, dashboard),
    TemplateRule("modal", lambda f: f.modal, modal),
    TemplateRule("product_card", lambda f: f.product_card, product_card),
    TemplateRule("profile_card", lambda f: f.profile_card, profile_card),
    TemplateRule("stat_card", lambda f: f.stat_card, stat_card),
    TemplateRule("hero", lambda f: f.hero, hero),
    TemplateRule("gallery", lambda f: f.gallery, gallery),
    TemplateRule("testimonial", lambda f: f.testimonial, testimonial),
    TemplateRule("pricing", lambda f: f.pricing, pricing),
    TemplateRule("search_bar", lambda f: f.search_bar, search_bar),
    TemplateRule("item_card", lambda f: f.item_card, item_card),
    TemplateRule("form", lambda f: f.form, form),
    TemplateRule("table", lambda f: f.table, table),
    TemplateRule("default", lambda f: True, default),
)


def select_template(flags: FeatureFlags) -> TemplateRule:
    for rule in TEMPLATE_RULES:
        if rule.predicate(flags):
            return rule
    # The last rule always matches.
    return TEMPLATE_RULES[-1]


def synthesize(analysis: IntentAnalysis, content: TemplateContent = DEFAULT_CONTENT) -> Plan:
    """Build a fresh plan for a create/regenerate intent."""
    if analysis.minimal:
        blueprint = minimal(analysis, content)
        logger.debug("Synthesized minimal plan (%s)", analysis.minimal_source)
    else:
        rule = select_template(analysis.flags)
        blueprint = rule.build(analysis, content)
        logger.debug("Synthesized plan from template %r", rule.name)
    return Plan(modification_type=analysis.modification_type, root=build_tree(blueprint))
