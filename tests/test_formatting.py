from contactsheet.intake.formatting import format_sheet
from contactsheet.sheets import CellStyle


def seed(sheet, headers):
    sheet.append_row(list(headers))
    for row in [
        ["Kofi", "0201", "Tema", "2026-10-19", "10:00:00"],
        ["Ama", "0202", "Accra", "2026-10-18", "17:45:00"],
        ["Yaw", "0203", "Ho", "2026-10-19", "08:15:00"],
        ["Esi", "0204", "Cape Coast", "2026-10-18", "17:45:00"],
    ]:
        sheet.append_row(row)


def test_rows_sorted_oldest_first_and_stable(sheet, config):
    seed(sheet, config.headers)

    format_sheet(sheet, config)

    assert sheet.rows[0] == list(config.headers)
    assert [r[0] for r in sheet.rows[1:]] == ["Ama", "Esi", "Yaw", "Kofi"]


def test_header_and_data_styling(sheet, config):
    seed(sheet, config.headers)
    palette = config.palette

    format_sheet(sheet, config)

    assert sheet.frozen_rows == 1
    header = sheet.style_at(1, 1)
    assert header.background == palette.header_background
    assert header.font_color == palette.header_text
    assert header.bold is True
    assert header.font_size == config.header_font_size

    assert sheet.style_at(2, 1).background == palette.even_row
    assert sheet.style_at(3, 1).background == palette.odd_row
    assert sheet.style_at(5, 5).border_color == palette.border
    assert sheet.style_at(2, 3).horizontal_alignment == "left"
    assert sheet.style_at(4, 4).horizontal_alignment == "center"
    assert sheet.style_at(4, 5).horizontal_alignment == "center"
    assert sheet.resized_columns == [1, 2, 3, 4, 5]


def test_formatting_twice_is_idempotent(sheet, config):
    seed(sheet, config.headers)

    format_sheet(sheet, config)
    rows = [list(r) for r in sheet.rows]
    styles = dict(sheet.styles)

    format_sheet(sheet, config)

    assert sheet.rows == rows
    assert sheet.styles == styles


def test_header_only_sheet(sheet, config):
    sheet.append_row(list(config.headers))

    format_sheet(sheet, config)

    assert sheet.style_at(1, 5).bold is True
    assert sheet.style_at(2, 1) is None
    assert isinstance(sheet.style_at(1, 1), CellStyle)
