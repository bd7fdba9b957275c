from timebank.data_imports.modules.row_validator import resolve_column, validate_row
from timebank.pydantic_models.config.imports_config import ColumnAliases


def _row(**overrides):
    row = {
        "Data": "2024-01-15",
        "Entrada": "09:00",
        "Saída Almoço": "12:00",
        "Volta Almoço": "13:00",
        "Saída": "18:00",
        "Horas Contratuais": "8",
        "Observações": "  Reunião  ",
    }
    row.update(overrides)
    return row


def test_valid_row_builds_draft():
    result = validate_row(_row(), 0)
    assert result.is_valid
    assert result.errors == []
    draft = result.data
    assert draft.date == "2024-01-15"
    assert draft.check_in == "09:00"
    assert draft.lunch_out == "12:00"
    assert draft.lunch_in == "13:00"
    assert draft.check_out == "18:00"
    assert draft.contractual_hours == 8.0
    assert draft.notes == "Reunião"


def test_invalid_date_message_uses_sheet_line():
    result = validate_row(_row(Data="not-a-date"), 3)
    assert not result.is_valid
    assert result.data is None
    assert result.errors == ["Linha 5: Data inválida ou ausente"]


def test_all_errors_reported_together():
    row = _row(Data="", Entrada="x", **{"Saída": None, "Volta Almoço": "", "Horas Contratuais": "30"})
    result = validate_row(row, 0)
    assert result.errors == [
        "Linha 2: Data inválida ou ausente",
        "Linha 2: Horário de entrada inválido ou ausente",
        "Linha 2: Horário de saída inválido ou ausente",
        "Linha 2: Se informado horário de almoço, tanto saída quanto volta devem ser preenchidos",
        "Linha 2: Horas contratuais inválidas (deve ser entre 0 e 24)",
    ]


def test_only_lunch_in_is_an_error():
    result = validate_row(_row(**{"Saída Almoço": None}), 0)
    assert not result.is_valid
    assert any("almoço" in e for e in result.errors)


def test_no_lunch_is_valid():
    result = validate_row(_row(**{"Saída Almoço": "", "Volta Almoço": "  "}), 0)
    assert result.is_valid
    assert result.data.lunch_out is None
    assert result.data.lunch_in is None


def test_contractual_hours_default_and_override():
    assert validate_row(_row(**{"Horas Contratuais": ""}), 0).data.contractual_hours == 8.0
    result = validate_row(_row(**{"Horas Contratuais": None}), 0, default_contractual_hours=6.0)
    assert result.data.contractual_hours == 6.0


def test_contractual_hours_parsing():
    assert validate_row(_row(**{"Horas Contratuais": "7,5"}), 0).data.contractual_hours == 7.5
    assert validate_row(_row(**{"Horas Contratuais": 0}), 0).data.contractual_hours == 0.0
    assert validate_row(_row(**{"Horas Contratuais": 24}), 0).data.contractual_hours == 24.0
    for bad in ("-1", "24.5", "oito", "8h"):
        result = validate_row(_row(**{"Horas Contratuais": bad}), 0)
        assert result.errors == ["Linha 2: Horas contratuais inválidas (deve ser entre 0 e 24)"]


def test_notes_absent_when_blank():
    assert validate_row(_row(**{"Observações": "   "}), 0).data.notes is None


def test_alias_headers_and_spreadsheet_numbers():
    row = {
        "DATE": 45306,
        "CHECK_IN": 0.375,
        "CHECK_OUT": 0.75,
        "CONTRACTUAL_HOURS": 6,
        "NOTES": 42,
    }
    result = validate_row(row, 0)
    assert result.is_valid
    assert result.data.date == "2024-01-15"
    assert result.data.check_in == "09:00"
    assert result.data.check_out == "18:00"
    assert result.data.contractual_hours == 6.0
    assert result.data.notes == "42"


def test_column_letter_fallback():
    row = {"A": "16/01/2024", "B": "8:30", "E": "17:30"}
    result = validate_row(row, 0)
    assert result.is_valid
    assert result.data.date == "2024-01-16"


def test_resolve_column_takes_first_non_empty():
    row = {"Data": "  ", "data": None, "DATE": "2024-01-15", "A": "2024-02-01"}
    assert resolve_column(row, ["Data", "data", "DATE", "A"]) == "2024-01-15"
    assert resolve_column({"x": 0}, ["x"]) == 0
    assert resolve_column({}, ["x"]) is None


def test_custom_aliases():
    aliases = ColumnAliases(date=["Dia"], check_in=["Inicio"], check_out=["Fim"])
    result = validate_row({"Dia": "2024-01-15", "Inicio": "07:00", "Fim": "15:00"}, 0, aliases=aliases)
    assert result.is_valid
    assert result.data.check_in == "07:00"


def test_huge_integer_contractual_hours_is_reported():
    result = validate_row(_row(**{"Horas Contratuais": 10**400}), 0)
    assert result.errors == ["Linha 2: Horas contratuais inválidas (deve ser entre 0 e 24)"]


def test_fraction_near_one_gives_time_message():
    result = validate_row(_row(**{"Saída": 0.9999}), 0)
    assert result.errors == ["Linha 2: Horário de saída inválido ou ausente"]
