"""
Response Parser
Turns a remote backend's JSON reply into TestArtifact objects.

Accepted shapes:
- {"testCases": [...]} (also "test_cases")
- a bare JSON array of test cases
Either may be wrapped in a Markdown code fence.
"""
import json
import re
from typing import Any, Dict, List, Tuple

from core.domain.errors import ResponseFormatError
from core.domain.test_case import GenerationContext, TestArtifact, TestStep

CODE_FENCE = re.compile(r'^```(?:json)?\s*(.*?)\s*```$', re.DOTALL | re.IGNORECASE)


def strip_code_fence(text: str) -> str:
    """Remove a surrounding ```json ... ``` fence if present."""
    stripped = (text or '').strip()
    match = CODE_FENCE.match(stripped)
    return match.group(1) if match else stripped


def parse_test_case_response(
    content: str,
    context: GenerationContext
) -> Tuple[List[TestArtifact], List[str]]:
    """
    Parse a backend reply.

    Args:
        content: Raw completion text
        context: Request context used to default userType and module

    Returns:
        (test_cases, warnings) where warnings describe skipped items

    Raises:
        ResponseFormatError: If the reply is not JSON or has no test case list
    """
    try:
        data = json.loads(strip_code_fence(content))
    except json.JSONDecodeError as e:
        raise ResponseFormatError(f"Response is not valid JSON: {e}")

    if isinstance(data, dict):
        items = data.get('testCases', data.get('test_cases'))
    else:
        items = data
    if not isinstance(items, list):
        raise ResponseFormatError("Response does not contain a testCases array")

    test_cases: List[TestArtifact] = []
    warnings: List[str] = []
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            warnings.append(f"Test case {index + 1}: skipped non-object entry")
            continue
        try:
            test_cases.append(_to_artifact(item, index, context))
        except (TypeError, ValueError) as e:
            warnings.append(f"Test case {index + 1}: {e}")

    return test_cases, warnings


def _to_artifact(item: Dict[str, Any], index: int, context: GenerationContext) -> TestArtifact:
    default_module = context.selected_modules[0] if context.selected_modules else ''
    steps = [
        _to_step(step, position)
        for position, step in enumerate(item.get('steps') or [], start=1)
        if isinstance(step, dict)
    ]
    return TestArtifact(
        id=_text(item.get('id')) or f"TC_{index + 1:03d}",
        title=_text(item.get('title')),
        description=_text(item.get('description')),
        module=_text(item.get('module')) or default_module,
        user_type=_text(item.get('userType') or item.get('user_type')) or context.user_type,
        priority=item.get('priority'),
        tags=_text_list(item.get('tags')),
        steps=steps,
        expected_result=_text(item.get('expectedResult') or item.get('expected_result')),
        preconditions=_text_list(item.get('preconditions')),
        source_story_id=_text(item.get('sourceStoryId') or item.get('source_story_id')) or None,
    )


def _to_step(step: Dict[str, Any], position: int) -> TestStep:
    number = step.get('stepNumber', step.get('step_number'))
    try:
        number = int(number)
    except (TypeError, ValueError):
        number = position
    test_data = step.get('testData', step.get('test_data'))
    return TestStep(
        step_number=number,
        action=_text(step.get('action')),
        expected_result=_text(step.get('expectedResult') or step.get('expected_result')),
        test_data=_text(test_data) if test_data is not None else None,
    )


def _text(value: Any) -> str:
    if value is None:
        return ''
    return str(value).strip()


def _text_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value.strip()] if value.strip() else []
    if isinstance(value, list):
        return [_text(v) for v in value if _text(v)]
    return [_text(value)]
