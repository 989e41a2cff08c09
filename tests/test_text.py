import pygame
import pytest

from spaceinvaders.sprites import Sprites
from spaceinvaders.text import (
    FONT_WIDTH,
    NUM_GLYPHS,
    Font,
    Typewriter,
    glyph_index,
    text_width,
)
from spaceinvaders.util import InitError


def _font():
    glyphs = []
    for i in range(NUM_GLYPHS):
        glyph = pygame.Surface((8, 8), pygame.SRCALPHA)
        glyph.fill((i, 100, 200, 255))
        glyphs.append(glyph)
    return Font(glyphs)


@pytest.mark.parametrize(
    "char,index",
    [("a", 0), ("A", 0), ("z", 25), ("0", 26), ("9", 35), ("<", 36), ("-", 41), (" ", 42)],
)
def test_glyph_index_matches_table(char, index):
    assert glyph_index(char) == index


def test_glyph_index_unknown_raises():
    with pytest.raises(ValueError):
        glyph_index("!")


def test_text_width_is_additive():
    assert text_width("", 0) == 0
    assert text_width("ab", 3) + text_width("cd", 3) == text_width("abcd", 3)


def test_font_requires_all_glyphs():
    with pytest.raises(InitError):
        Font([pygame.Surface((8, 8))])


def test_draw_places_glyphs_in_order():
    font = _font()
    target = pygame.Surface((40, 8), pygame.SRCALPHA)
    font.draw(target, "Ba", 0, 0)
    assert tuple(target.get_at((0, 0))) == (1, 100, 200, 255)
    assert tuple(target.get_at((FONT_WIDTH, 0))) == (0, 100, 200, 255)


def test_draw_with_spacing_leaves_gap():
    font = _font()
    target = pygame.Surface((40, 8), pygame.SRCALPHA)
    font.draw(target, "aa", 0, 0, spacing=2)
    assert target.get_at((FONT_WIDTH, 0)).a == 0
    assert tuple(target.get_at((FONT_WIDTH + 2, 0))) == (0, 100, 200, 255)


def test_draw_unknown_char_raises():
    target = pygame.Surface((16, 8), pygame.SRCALPHA)
    with pytest.raises(ValueError):
        _font().draw(target, "a!", 0, 0)


def test_font_from_sprites():
    sheet = pygame.Surface((80, 128), pygame.SRCALPHA)
    sheet.fill((0, 0, 0, 255))
    sheet.set_at((1, 69), (7, 7, 7, 255))
    font = Font.from_sprites(Sprites.from_sheet(sheet))
    target = pygame.Surface((8, 8), pygame.SRCALPHA)
    font.draw(target, "A", 0, 0)
    assert tuple(target.get_at((0, 0))) == (7, 7, 7, 255)


def test_typewriter_without_delay():
    writer = Typewriter("ab", delay=0)
    target = pygame.Surface((32, 8), pygame.SRCALPHA)
    results = []
    shown = []
    for _ in range(3):
        results.append(writer.step(_font(), target, 0, 0))
        shown.append(writer.visible_text())
    assert results == [False, False, True]
    assert shown == ["a", "ab", "ab"]


def test_typewriter_reveals_prefixes_and_finishes():
    writer = Typewriter("space", delay=3)
    font = _font()
    target = pygame.Surface((64, 8), pygame.SRCALPHA)
    for _ in range(200):
        assert "space".startswith(writer.visible_text())
        if writer.step(font, target, 0, 0):
            break
    assert writer.visible_text() == "space"
    assert writer.step(font, target, 0, 0) is False