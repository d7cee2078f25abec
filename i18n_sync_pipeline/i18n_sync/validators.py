from __future__ import annotations
import re
from typing import Dict, List
from dataclasses import dataclass

PLACEHOLDER_RE = re.compile(r"{{\s*\w+\s*}}")

@dataclass
class ValidationIssue:
    kind: str
    detail: str
    key: str
    source: str
    target: str
    locale: str

def placeholders(s: str) -> List[str]:
    return sorted(t.replace(" ", "") for t in PLACEHOLDER_RE.findall(s))

def check_placeholder_parity(key: str, source: str, target: str, locale: str) -> List[ValidationIssue]:
    issues = []
    if placeholders(source) != placeholders(target):
        issues.append(ValidationIssue("placeholder_parity", "{{placeholder}} tokens mismatch", key, source, target, locale))
    return issues

def validate_translations(source: Dict[str, str], translated: Dict[str, str], locale: str) -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []
    for key, target in translated.items():
        if key in source:
            issues.extend(check_placeholder_parity(key, source[key], target, locale))
    return issues
