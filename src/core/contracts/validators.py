"""
JSON Schema Contract Validators

Валидация эталонных наборов (reference suites) согласно JSON Schema.
Использует библиотеку jsonschema для проверки соответствия данных схеме,
после чего данные разбираются в Pydantic модели ReferenceSuite.

Схемы:
- reference_suite.json

Наборы:
- contracts/vectors/<name>.json
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterator

import jsonschema
from jsonschema import Draft202012Validator, ValidationError

from src.core.domain.reference import ReferenceSuite

# Корень проекта (4 уровня вверх от этого файла)
_CONTRACTS_DIR = Path(__file__).parent.parent.parent.parent / "contracts"


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Находит схемы в contracts/schema/ относительно корня проекта.
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or _CONTRACTS_DIR / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'reference_suite')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если схема не проходит meta-валидацию
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        self._schemas[schema_name] = schema
        return schema


# Загрузчик создаётся при первом обращении: импорт модуля не требует
# наличия contracts/schema
_SCHEMA_LOADER: SchemaLoader | None = None


def get_schema_loader() -> SchemaLoader:
    """Общий загрузчик схем из contracts/schema/."""
    global _SCHEMA_LOADER
    if _SCHEMA_LOADER is None:
        _SCHEMA_LOADER = SchemaLoader()
    return _SCHEMA_LOADER


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
        self.schema = get_schema_loader().load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

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
        """Итератор по всем ошибкам валидации."""
        return self.validator.iter_errors(data)


class ReferenceSuiteValidator(ContractValidator):
    """Валидатор эталонного набора."""

    def __init__(self):
        super().__init__("reference_suite")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_reference_suite(data: Dict[str, Any]) -> None:
    """
    Валидация данных эталонного набора.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    ReferenceSuiteValidator().validate(data)


def load_reference_suite(name: str, vectors_dir: Path | None = None) -> ReferenceSuite:
    """
    Загрузка, валидация и разбор эталонного набора.

    Args:
        name: Имя набора без расширения (например, 'sqrt')
        vectors_dir: Каталог наборов (default: contracts/vectors)

    Returns:
        ReferenceSuite

    Raises:
        FileNotFoundError: Если файл набора не найден
        ValidationError: Если данные не соответствуют схеме
    """
    path = (vectors_dir or _CONTRACTS_DIR / "vectors") / f"{name}.json"
    if not path.exists():
        raise FileNotFoundError(f"Reference suite not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    validate_reference_suite(data)
    return ReferenceSuite.model_validate(data)
