"""
Unit tests for core/pdf_engine/text_measure.py: measurement and wrapping.
"""

import pytest

from core.pdf_engine import FontSpec, MeasurementError
from core.pdf_engine.text_measure import LineWrapper, TextMeasurer, normalize_text


BODY = FontSpec(family="Helvetica", size=10, leading=14)
BOLD = FontSpec(family="Helvetica", size=10, leading=14, bold=True)


# ---------------------------------------------------------------------------
# TextMeasurer
# ---------------------------------------------------------------------------

class TestTextMeasurer:
    def test_empty_string_is_zero(self, measurer):
        assert measurer.width("", BODY) == 0

    def test_prefix_never_wider(self, measurer):
        text = "Experiência profissional em gestão"
        widths = [measurer.width(text[:i], BODY) for i in range(len(text) + 1)]
        assert widths == sorted(widths)

    def test_bold_is_wider(self, measurer):
        assert measurer.width("SUMÁRIO", BOLD) > measurer.width("SUMÁRIO", BODY)

    def test_scales_with_size(self, measurer):
        big = FontSpec(family="Helvetica", size=20, leading=24)
        assert measurer.width("Analista", big) == pytest.approx(2 * measurer.width("Analista", BODY))

    def test_decomposed_accent_is_one_glyph(self, measurer):
        composed = "Experiência"
        decomposed = "Experie\u0302ncia"
        assert measurer.width(decomposed, BODY) == measurer.width(composed, BODY)

    def test_accented_chars_have_width(self, measurer):
        for char in "áàâãéêíóôõúçÁÉÇ":
            assert measurer.width(char, BODY) > 0

    def test_unknown_font_raises_measurement_error(self, measurer):
        missing = FontSpec(family="NoSuchFontFamily", size=10, leading=14)
        with pytest.raises(MeasurementError) as exc_info:
            measurer.width("abc", missing)
        assert exc_info.value.font_name == "NoSuchFontFamily"
        assert exc_info.value.cause is not None

    def test_glyph_cache_is_shared(self):
        TextMeasurer().width("Z", BODY)
        assert ("Z", "Helvetica", 10) in TextMeasurer._glyph_cache


class TestNormalizeText:
    def test_nfc(self):
        assert normalize_text("a\u0303") == "ã"

    def test_line_endings(self):
        assert normalize_text("a\r\nb\rc") == "a\nb\nc"


# ---------------------------------------------------------------------------
# LineWrapper
# ---------------------------------------------------------------------------

LOREM = (
    "Responsável pela gestão de uma carteira de clientes corporativos, "
    "negociação de contratos e acompanhamento de indicadores comerciais "
    "com foco em retenção e expansão de receita."
)


class TestLineWrapper:
    def test_short_text_single_line(self, wrapper):
        assert wrapper.wrap("Olá mundo", 500, BODY) == ["Olá mundo"]

    @pytest.mark.parametrize("max_width", [60, 120, 200, 400])
    def test_lines_fit_width(self, wrapper, measurer, max_width):
        lines = wrapper.wrap(LOREM, max_width, BODY)
        assert len(lines) > 1 or max_width >= measurer.width(LOREM, BODY)
        for line in lines:
            if " " in line:
                assert measurer.width(line, BODY) <= max_width

    def test_greedy_next_word_would_overflow(self, wrapper, measurer):
        max_width = 150
        lines = wrapper.wrap(LOREM, max_width, BODY)
        for current, following in zip(lines, lines[1:]):
            next_word = following.split()[0]
            assert measurer.width(f"{current} {next_word}", BODY) > max_width

    def test_words_preserved_in_order(self, wrapper):
        lines = wrapper.wrap(LOREM, 120, BODY)
        assert " ".join(lines).split() == LOREM.split()

    def test_long_word_alone_unbroken(self, wrapper, measurer):
        word = "Pneumoultramicroscopicossilicovulcanoconiótico"
        lines = wrapper.wrap(f"Termo {word} final", 80, BODY)
        assert word in lines
        assert measurer.width(word, BODY) > 80
        assert lines == ["Termo", word, "final"]

    def test_whitespace_collapsed_and_trimmed(self, wrapper):
        assert wrapper.wrap("   Aumentei    vendas\tem  20%   ", 500, BODY) == ["Aumentei vendas em 20%"]

    def test_hard_breaks(self, wrapper):
        assert wrapper.wrap("Primeira linha\nSegunda linha", 500, BODY) == [
            "Primeira linha", "Segunda linha",
        ]

    def test_blank_line_between_paragraphs_kept(self, wrapper):
        assert wrapper.wrap("\n\nUm\n\nDois\n\n", 500, BODY) == ["Um", "", "Dois"]

    def test_empty_text(self, wrapper):
        assert wrapper.wrap("", 100, BODY) == []
        assert wrapper.wrap("   \n  ", 100, BODY) == []

    def test_output_is_nfc(self, wrapper):
        assert wrapper.wrap("Educac\u0327a\u0303o", 500, BODY) == ["Educação"]

    def test_wrap_lines_marks_source_line_ends(self, wrapper):
        lines = wrapper.wrap_lines(LOREM + "\nFim", 150, BODY)
        flags = [line.ends_source_line for line in lines]
        assert flags[-1] is True
        assert flags[-2] is True
        assert not any(flags[:-2])

    def test_default_measurer(self):
        assert isinstance(LineWrapper().measurer, TextMeasurer)
