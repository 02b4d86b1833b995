import re

PLACEHOLDER = re.compile(r'\{\{\s*(\w+)\s*\}\}')
LEFTOVER = re.compile(r'\{\{[^}]+\}\}')


def render(text, variables):
    """Substitute ``{{name}}`` placeholders; unknown ones are removed.

    ``None`` values render as an empty string.
    """
    if not text:
        return ''

    def substitute(match):
        name = match.group(1)
        if name not in variables:
            return match.group(0)
        value = variables[name]
        return '' if value is None else str(value)

    return LEFTOVER.sub('', PLACEHOLDER.sub(substitute, text))
