"""Static story graph validation utilities."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Mapping

from cyoa.domain.defs import AdventureStoryDef, StoryNodeDef
from cyoa.domain.requirements import StatAtLeast, UnrecognizedRequirement, describe_requirement

logger = logging.getLogger(__name__)

Severity = str


@dataclass(frozen=True, slots=True)
class Issue:
    severity: Severity
    code: str
    message: str
    context: dict[str, str]


@dataclass(frozen=True, slots=True)
class ValidationOptions:
    """Toggles for the optional checks."""

    check_missing_nodes: bool = True
    check_unreachable_nodes: bool = False
    check_requirements: bool = True


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Outcome of validating a story."""

    issues: List[Issue] = field(default_factory=list)

    @property
    def errors(self) -> list[str]:
        return [format_issue(issue) for issue in self.issues if issue.severity == "ERROR"]

    @property
    def warnings(self) -> list[str]:
        return [format_issue(issue) for issue in self.issues if issue.severity == "WARN"]

    @property
    def is_valid(self) -> bool:
        return not any(issue.severity == "ERROR" for issue in self.issues)

    def report(self) -> str:
        """Return a multi-line summary suitable for console output."""
        lines = [format_issue(issue) for issue in self.issues]
        status = "valid" if self.is_valid else "invalid"
        lines.append(
            f"Story is {status}: errors={len(self.errors)} warnings={len(self.warnings)}"
        )
        return "\n".join(lines)


@dataclass(frozen=True, slots=True)
class StoryStatistics:
    total_nodes: int
    total_choices: int
    ending_nodes: int
    average_choices_per_node: float


def format_issue(issue: Issue) -> str:
    context = " ".join(f"{key}={value}" for key, value in issue.context.items())
    suffix = f" ({context})" if context else ""
    return f"[{issue.severity}] {issue.code}: {issue.message}{suffix}"


def validate_story(
    story: AdventureStoryDef, options: ValidationOptions | None = None
) -> ValidationResult:
    """Check a story for structural integrity without modifying it."""
    options = options or ValidationOptions()
    issues: list[Issue] = []

    if story.start_node_id not in story.nodes:
        issues.append(
            Issue(
                severity="ERROR",
                code="MISSING_START_NODE",
                message=f"Start node '{story.start_node_id}' does not exist.",
                context={"story_id": story.id, "node_id": story.start_node_id},
            )
        )

    if options.check_missing_nodes:
        missing = find_missing_nodes(story.nodes)
        if missing:
            logger.warning("Story '%s' references missing nodes: %s", story.id, missing)
            issues.append(
                Issue(
                    severity="WARN",
                    code="MISSING_NODE_REF",
                    message=f"Missing nodes referenced: {', '.join(missing)}",
                    context={"story_id": story.id},
                )
            )

    if options.check_unreachable_nodes:
        unreachable = find_unreachable_nodes(story.nodes, story.start_node_id)
        if unreachable:
            issues.append(
                Issue(
                    severity="WARN",
                    code="UNREACHABLE_NODE",
                    message=f"Unreachable nodes found: {', '.join(unreachable)}",
                    context={"story_id": story.id},
                )
            )

    if options.check_requirements:
        _warn_on_unknown_requirements(story.nodes, issues)

    _warn_on_ending_choices(story.nodes, issues)

    if not any(node.is_ending for node in story.nodes.values()):
        issues.append(
            Issue(
                severity="ERROR",
                code="NO_ENDING_NODES",
                message="Story has no ending nodes.",
                context={"story_id": story.id},
            )
        )

    result = ValidationResult(issues=issues)
    logger.debug(
        "Validated story '%s': errors=%d warnings=%d",
        story.id,
        len(result.errors),
        len(result.warnings),
    )
    return result


def find_missing_nodes(nodes: Mapping[str, StoryNodeDef]) -> list[str]:
    """Return each dangling choice target once, in discovery order."""
    missing: dict[str, None] = {}
    for node in nodes.values():
        for choice in node.choices:
            if choice.next_node_id not in nodes:
                missing.setdefault(choice.next_node_id, None)
    return list(missing)


def find_unreachable_nodes(nodes: Mapping[str, StoryNodeDef], start_node_id: str) -> list[str]:
    """Return node ids not reachable from the start node, ignoring requirements."""
    reachable: set[str] = set()
    stack: list[str] = [start_node_id]
    while stack:
        node_id = stack.pop()
        if node_id in reachable:
            continue
        reachable.add(node_id)
        node = nodes.get(node_id)
        if node is None:
            continue
        for choice in node.choices:
            if choice.next_node_id not in reachable:
                stack.append(choice.next_node_id)
    return [node_id for node_id in nodes if node_id not in reachable]


def get_statistics(story: AdventureStoryDef) -> StoryStatistics:
    nodes = list(story.nodes.values())
    total_nodes = len(nodes)
    total_choices = sum(len(node.choices) for node in nodes)
    ending_nodes = sum(1 for node in nodes if node.is_ending)
    average = total_choices / total_nodes if total_nodes else 0.0
    return StoryStatistics(
        total_nodes=total_nodes,
        total_choices=total_choices,
        ending_nodes=ending_nodes,
        average_choices_per_node=average,
    )


def _warn_on_unknown_requirements(
    nodes: Mapping[str, StoryNodeDef], issues: list[Issue]
) -> None:
    for node in nodes.values():
        for index, choice in enumerate(node.choices):
            requirement = choice.requirement
            if isinstance(requirement, UnrecognizedRequirement):
                code = "UNKNOWN_REQUIREMENT"
                message = "Requirement is not recognized and will always pass."
            elif isinstance(requirement, StatAtLeast) and requirement.threshold is None:
                code = "INVALID_STAT_THRESHOLD"
                message = "Stat threshold is not a number; the choice is never available."
            else:
                continue
            issues.append(
                Issue(
                    severity="WARN",
                    code=code,
                    message=message,
                    context={
                        "node_id": node.id,
                        "field_path": f"choices[{index}].requirement",
                        "requirement": describe_requirement(requirement),
                    },
                )
            )


def _warn_on_ending_choices(nodes: Mapping[str, StoryNodeDef], issues: list[Issue]) -> None:
    for node in nodes.values():
        if node.is_ending and node.choices:
            issues.append(
                Issue(
                    severity="WARN",
                    code="ENDING_WITH_CHOICES",
                    message="Ending node declares choices that can never be offered.",
                    context={"node_id": node.id},
                )
            )
