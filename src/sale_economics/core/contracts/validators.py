"""
JSON Schema Contract Validators

Валидация JSON данных на границе с формой и хранилищем.
Калькулятор сам по себе тотален и ничего не отклоняет; проверка
"осмысленности" ввода выполняется здесь, до вызова расчётов.
Использует библиотеку jsonschema (Draft 2020-12).

Схемы (sale_economics/core/contracts/schema/):
- sale_input.json: payload формы до расчёта производных полей
- sale_record.json: сохраняемая запись продажи
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterator

import jsonschema
from jsonschema import Draft202012Validator, ValidationError


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Схемы поставляются вместе с пакетом в каталоге schema/ рядом с модулем.
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'sale_record')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если файл не является валидной JSON Schema
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # meta-validation самой схемы
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        self._schemas[schema_name] = schema
        return schema


# Глобальный экземпляр загрузчика
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Базовый класс для валидаторов контрактов.

    Инкапсулирует логику валидации данных против JSON Schema.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(
            self.schema, format_checker=Draft202012Validator.FORMAT_CHECKER
        )

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Валидация данных против схемы.

        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        """Проверка валидности данных без exception."""
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]) -> Iterator[ValidationError]:
        """
        Итератор по всем ошибкам валидации.

        Форма использует его, чтобы показать все невалидные поля сразу.
        """
        return self.validator.iter_errors(data)


class SaleInputValidator(ContractValidator):
    """Валидатор payload формы (sale_input)."""

    def __init__(self):
        super().__init__("sale_input")


class SaleRecordValidator(ContractValidator):
    """Валидатор сохраняемой записи (sale_record)."""

    def __init__(self):
        super().__init__("sale_record")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_sale_input(data: Dict[str, Any]) -> None:
    """
    Валидация payload формы.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    SaleInputValidator().validate(data)


def validate_sale_record(data: Dict[str, Any]) -> None:
    """
    Валидация записи продажи.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    SaleRecordValidator().validate(data)
