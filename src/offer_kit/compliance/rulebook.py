# compliance/rulebook.py

import json
import logging
from collections.abc import Mapping
from importlib import resources
from pathlib import Path

import yaml
from pydantic import ValidationError

from .forms import RuleForm
from .rule import ComplianceRule

logger = logging.getLogger(__name__)

DEFAULT_RULES_RESOURCE = "data/default_rules.yaml"


class RuleValidationError(ValueError):
    """A submitted rule definition does not have the ComplianceRule shape."""

    def __init__(self, message: str, key: str | None = None) -> None:
        super().__init__(message)
        self.key = key


class RuleBook:
    """Compliance rules grouped by jurisdiction.

    Keys are unique within a jurisdiction. Adding a rule under an existing
    key replaces it; rules keep their insertion order, which is the order
    flags are reported in. Every mutation bumps ``version``.
    """

    def __init__(self) -> None:
        self._rules: dict[str, dict[str, ComplianceRule]] = {}
        self._names: dict[str, str] = {}
        self._version = 0

    @classmethod
    def from_defaults(cls) -> "RuleBook":
        book = cls()
        text = (
            resources.files("offer_kit.compliance")
            .joinpath(DEFAULT_RULES_RESOURCE)
            .read_text(encoding="utf-8")
        )
        book.load_mapping(yaml.safe_load(text))
        logger.info(
            "Loaded default rules for %d jurisdictions", len(book.jurisdictions())
        )
        return book

    @property
    def version(self) -> int:
        return self._version

    def load_directory(self, directory: str | Path) -> None:
        for file_path in sorted(Path(directory).glob("*.yaml")):
            self.load_file(file_path)

    def load_file(self, file_path: str | Path) -> None:
        with open(file_path) as f:
            data = yaml.safe_load(f)
        self.load_mapping(data)
        logger.debug("Loaded rules from %s", file_path)

    def load_mapping(self, data: Mapping) -> None:
        """Merge ``{CODE: {name: ..., rules: {key: definition}}}``.

        Everything is validated before anything is merged.
        """
        if not isinstance(data, Mapping):
            raise RuleValidationError("Rule file must map jurisdiction codes to rule sets")

        parsed: dict[str, tuple[str | None, list[ComplianceRule]]] = {}
        for jurisdiction, block in data.items():
            if not isinstance(block, Mapping):
                raise RuleValidationError(f"Jurisdiction '{jurisdiction}' must be a mapping")
            definitions = block.get("rules") or {}
            if not isinstance(definitions, Mapping):
                raise RuleValidationError(f"Rules for '{jurisdiction}' must be a mapping")
            parsed[str(jurisdiction)] = (
                block.get("name"),
                [_parse_rule(key, d) for key, d in definitions.items()],
            )

        for jurisdiction, (name, rules) in parsed.items():
            if name:
                self._names[jurisdiction] = str(name)
            self._merge(jurisdiction, rules)

    def add_rule(
        self, jurisdiction: str, key: str, definition: Mapping
    ) -> ComplianceRule:
        rule = _parse_rule(key, definition)
        self._merge(jurisdiction, [rule])
        logger.info("Added rule %s for %s", key, jurisdiction)
        return rule

    def add_rules(
        self, jurisdiction: str, definitions: Mapping[str, Mapping]
    ) -> list[ComplianceRule]:
        """All-or-nothing: one bad definition rejects the whole batch."""
        rules = [_parse_rule(key, d) for key, d in definitions.items()]
        self._merge(jurisdiction, rules)
        logger.info("Added %d rules for %s", len(rules), jurisdiction)
        return rules

    def add_rules_json(self, jurisdiction: str, text: str) -> list[ComplianceRule]:
        try:
            definitions = json.loads(text)
        except json.JSONDecodeError as exc:
            raise RuleValidationError(
                "Invalid JSON format. Please check the rule format."
            ) from exc
        if not isinstance(definitions, dict):
            raise RuleValidationError("Rule JSON must be an object keyed by rule name")
        return self.add_rules(jurisdiction, definitions)

    def add_rule_form(self, jurisdiction: str, form: RuleForm) -> ComplianceRule:
        if not form.name.strip() or not form.description.strip():
            raise RuleValidationError("Please fill in the rule name and description.")
        return self.add_rule(jurisdiction, form.rule_key, form.to_definition())

    def rules_for(self, jurisdiction: str) -> list[ComplianceRule]:
        return list(self._rules.get(jurisdiction, {}).values())

    def get(self, jurisdiction: str, key: str) -> ComplianceRule:
        try:
            return self._rules[jurisdiction][key]
        except KeyError:
            logger.error("Rule not found: jurisdiction=%s, key=%s", jurisdiction, key)
            raise KeyError(f"Rule '{key}' for '{jurisdiction}' not found")

    def jurisdictions(self) -> list[str]:
        return list(self._rules)

    def jurisdiction_name(self, jurisdiction: str) -> str:
        return self._names.get(jurisdiction, jurisdiction)

    def phrases_for(self, jurisdiction: str) -> list[str]:
        """Every flagged phrase of the jurisdiction, deduplicated in order."""
        seen: dict[str, None] = {}
        for rule in self.rules_for(jurisdiction):
            for phrase in rule.flagged_phrases:
                seen.setdefault(phrase, None)
        return list(seen)

    def _merge(self, jurisdiction: str, rules: list[ComplianceRule]) -> None:
        bucket = self._rules.setdefault(jurisdiction, {})
        for rule in rules:
            bucket[rule.key] = rule
        self._version += 1


def _parse_rule(key: object, definition: object) -> ComplianceRule:
    if not isinstance(definition, Mapping):
        raise RuleValidationError(f"Rule '{key}' must be an object", key=str(key))
    try:
        return ComplianceRule.model_validate({**definition, "key": str(key)})
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        raise RuleValidationError(f"Invalid rule '{key}': {problems}", key=str(key)) from exc
