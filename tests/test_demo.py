from termgrid.datatypes import BorderStyle
from termgrid.demo import border_gallery, demo_tables, nested_gallery
from termgrid.layout.measure import display_width
from termgrid.layout.terminal import AnsiColorMapper


def test_border_gallery_covers_every_style() -> None:
    captions = [caption for caption, _ in border_gallery()]
    assert captions == [f"Border style: {style.value}" for style in BorderStyle]


def test_every_demo_table_is_rectangular() -> None:
    mapper = AnsiColorMapper(capability="truecolor")
    for caption, table in demo_tables(mapper):
        widths = {display_width(line) for line in table.render(terminal_width=80).splitlines()}
        assert len(widths) == 1, caption


def test_nested_table_sits_inside_outer_cell() -> None:
    ((_, outer),) = nested_gallery(AnsiColorMapper(no_color=True))
    lines = outer.render().splitlines()
    assert lines[0].strip("─ ") == "Cache Report"
    assert lines[4].startswith("│ cache-01 │ ╭")
