"""Template Substitution Engine - Replace {{refStep:dataName}} tokens in text

Supported token forms:
    {{step_a:step_user_name}}   -> resolver("step_a", "step_user_name")
    {{recipient_firstname}}     -> resolver(None, "recipient_firstname")

A token whose resolver result is None is left in the text verbatim, so a
missing value stays visible in the rendered message.
"""
import re
from typing import List, Optional

from ..domain.models import PlaceholderToken
from .collaborators import PlaceholderResolverFn
from ..utils.logger import get_logger

logger = get_logger(__name__)

# No brace of either kind inside a token; "{{{a:b}}}" matches the inner pair
PLACEHOLDER_PATTERN = re.compile(r"\{\{([^{}]+)\}\}")


def parse_token(raw: str, inner: str) -> Optional[PlaceholderToken]:
    """
    Build a token from the text between the braces

    Returns None for ill-formed tokens such as "{{:name}}" or "{{step:}}".
    """
    if ":" in inner:
        ref_step, data_name = (part.strip() for part in inner.split(":", 1))
        if not ref_step or not data_name:
            return None
        return PlaceholderToken(raw=raw, ref_step=ref_step, data_name=data_name)

    data_name = inner.strip()
    if not data_name:
        return None
    return PlaceholderToken(raw=raw, ref_step=None, data_name=data_name)


def find_tokens(template: Optional[str]) -> List[PlaceholderToken]:
    """All well-formed tokens of a template, in order of appearance"""
    if not template:
        return []

    tokens = []
    for match in PLACEHOLDER_PATTERN.finditer(template):
        token = parse_token(match.group(0), match.group(1))
        if token is not None:
            tokens.append(token)
    return tokens


def substitute_template(
    template: Optional[str],
    resolver: Optional[PlaceholderResolverFn]
) -> Optional[str]:
    """
    Replace every placeholder token of template with the resolver's value

    Args:
        template: Message text, may be None
        resolver: (ref_step, data_name) -> value or None

    Returns:
        None for a None template, the template unchanged when it is empty or
        no resolver is given, the substituted text otherwise
    """
    if template is None:
        return None
    if not template or resolver is None:
        return template

    def replace(match: "re.Match[str]") -> str:
        token = parse_token(match.group(0), match.group(1))
        if token is None:
            return match.group(0)

        value = resolver(token.ref_step, token.data_name)
        if value is None:
            logger.debug(f"Leaving unresolved placeholder in place: {token.raw}")
            return token.raw
        return str(value)

    return PLACEHOLDER_PATTERN.sub(replace, template)
