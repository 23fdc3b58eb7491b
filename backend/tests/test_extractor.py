import pytest

from styleprint.services.extractor import (
    extract_breakpoints,
    extract_colors,
    extract_css_property,
    extract_font_families,
    extract_keyframes,
    extract_raw,
    extract_spacings,
    split_style_blocks,
)


class TestColors:
    def test_hex_inside_style_block_survives(self):
        css = split_style_blocks("<html><style>.a { color: #FF0000; }</style></html>")
        assert "#FF0000" in extract_colors(css)

    def test_duplicates_collapse(self):
        assert extract_colors("a{color:#fff} b{color:#fff}") == {"#fff"}

    def test_rgb_and_hsl_forms(self):
        css = "a { color: rgba(0, 0, 0, 0.5); background: hsl(210, 50%, 40%); border-color: rgb(1,2,3) }"
        assert extract_colors(css) == {"rgba(0, 0, 0, 0.5)", "hsl(210, 50%, 40%)", "rgb(1,2,3)"}

    def test_hex_needs_three_or_six_digits(self):
        assert extract_colors("a{color:#abcd}") == set()
        assert extract_colors("a{color:#abcdef}") == {"#abcdef"}

    def test_case_is_preserved(self):
        assert extract_colors("a{color:#AbC} b{color:#abc}") == {"#AbC", "#abc"}


class TestProperties:
    def test_font_family_trimmed_not_split(self):
        assert extract_font_families(".x{font-family: Arial, sans-serif;}") == {"Arial, sans-serif"}

    def test_value_ends_at_block_close(self):
        assert extract_font_families(".y{font-family:Georgia}") == {"Georgia"}

    def test_generic_property(self):
        css = "h1{font-size: 2rem} p{font-size:1rem;} small { font-size : 12px }"
        # "font-size :" has a space before the colon and is not a match
        assert extract_css_property(css, "font-size") == {"2rem", "1rem"}

    def test_longhands_do_not_match_shorthand(self):
        assert extract_css_property(".a{margin-top: 4px}", "margin") == set()

    def test_spacings_union_margin_padding_gap(self):
        css = ".a{margin: 0 auto; padding: 8px 16px; gap: 1rem; margin-top: 4px} .b{padding:8px 16px}"
        assert extract_spacings(css) == {"0 auto", "8px 16px", "1rem"}

    def test_box_shadow_keeps_commas(self):
        css = ".c{box-shadow: 0 1px 2px rgba(0,0,0,.1), 0 0 0 1px #eee;}"
        assert extract_css_property(css, "box-shadow") == {"0 1px 2px rgba(0,0,0,.1), 0 0 0 1px #eee"}


class TestKeyframes:
    def test_body_between_outer_braces(self):
        css = "@keyframes spin { from{transform:rotate(0)} to{transform:rotate(360deg)} }"
        assert extract_keyframes(css) == {
            "spin": "from{transform:rotate(0)} to{transform:rotate(360deg)}"
        }

    def test_first_definition_wins(self):
        css = "@keyframes fade{from{opacity:0}} @keyframes fade{to{opacity:1}}"
        assert extract_keyframes(css) == {"fade": "from{opacity:0}"}

    def test_several_names(self):
        css = "@keyframes a{0%{top:0}} .x{color:red} @keyframes b {50%{top:1px}}"
        assert set(extract_keyframes(css)) == {"a", "b"}


class TestBreakpoints:
    def test_first_media_query_per_width_wins(self):
        css = (
            "@media (min-width: 768px) { .a{color:red} }"
            "@media screen and (min-width: 768px) { .b{color:blue} }"
            "@media (max-width:1024px) { .c{} }"
        )
        assert extract_breakpoints(css) == {
            "768px": "@media (min-width: 768px)",
            "1024px": "@media (max-width:1024px)",
        }

    def test_media_without_width_ignored(self):
        assert extract_breakpoints("@media print { a{color:#000} }") == {}


class TestStyleBlocks:
    def test_blocks_in_order_case_insensitive(self):
        doc = "<STYLE type='text/css'>a{}</STYLE><p>x</p><style>b{}</style>"
        assert split_style_blocks(doc) == "a{}\nb{}\n"

    def test_unterminated_block_ignored(self):
        assert split_style_blocks("<style>a{color:red}") == ""


@pytest.mark.parametrize("fn", [
    extract_colors,
    extract_font_families,
    extract_spacings,
    extract_keyframes,
    extract_breakpoints,
    lambda css: extract_css_property(css, "z-index"),
])
def test_empty_input_gives_empty_result(fn):
    assert len(fn("")) == 0


def test_split_style_blocks_empty():
    assert split_style_blocks("") == ""


def test_malformed_css_is_best_effort():
    css = "a { color: #123456; } } } @keyframes broken { from { opacity: 0 "
    assert extract_colors(css) == {"#123456"}
    assert extract_keyframes(css) == {}


class TestExtractRaw:
    def test_full_document(self, landing_page):
        raw = extract_raw(landing_page)

        assert {"#3366FF", "#111", "rgba(0, 0, 0, 0.2)", "hsl(220, 90%, 56%)"} <= raw.colors
        assert raw.font_families == {'"Inter", sans-serif'}
        assert raw.font_sizes == {"3rem"}
        assert raw.font_weights == {"700"}
        assert raw.line_heights == {"1.1"}
        assert raw.spacings == {"0", "24px", "2rem"}
        assert raw.border_radius == {"12px"}
        assert raw.shadows == {"0 1px 3px rgba(0, 0, 0, 0.2)"}
        assert raw.transitions == {"background-color 150ms ease"}
        assert raw.z_indexes == {"50"}
        assert raw.opacity == {"0.95", "0", "1"}
        assert list(raw.keyframes) == ["fade-in"]
        assert raw.breakpoints == {"768px": "@media (min-width: 768px)"}
        assert [c.tag for c in raw.components][:2] == ["nav", "header"]

    def test_bare_css_is_scanned_directly(self):
        raw = extract_raw("a { color: #fff; padding: 4px }")
        assert raw.colors == {"#fff"}
        assert raw.spacings == {"4px"}
        assert raw.components == []

    def test_angle_bracket_in_css_comment_is_not_markup(self):
        raw = extract_raw("/* <b>brand</b> colors */ a { color: #fff }")
        assert raw.colors == {"#fff"}

    def test_angle_bracket_in_css_string_is_not_markup(self):
        raw = extract_raw('a::before { content: "<"; color: #0a0a0a }')
        assert raw.colors == {"#0a0a0a"}

    def test_inline_styles_are_not_scanned(self):
        raw = extract_raw('<div style="color:#fff">hi</div>')
        assert raw.colors == set()

    def test_empty_document(self):
        raw = extract_raw("")
        assert raw.colors == set()
        assert raw.keyframes == {}
        assert raw.components == []
