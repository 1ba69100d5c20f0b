"""
Instruction templates for UICraft.

The instruction is a pure function of the description and the stack. Keep
timestamps and anything random out of the template.
"""

from typing import Union

from .models import Stack


INSTRUCTION_TEMPLATE = """You are an experienced programmer with expertise in web development and UI/UX design. You create modern, animated, and fully responsive UI components. You are highly skilled in HTML, CSS, Tailwind CSS, Bootstrap, JavaScript, React, Next.js, Vue.js, Angular, and more.

Now, generate a UI component for: {description}
Framework to use: {stack}

Requirements:
- The code must be clean, well-structured, and easy to understand.
- Optimize for SEO where applicable.
- Focus on creating a modern, animated, and responsive UI design.
- Make the component accessible: semantic elements, labels and keyboard support.
- Include high-quality hover effects, shadows, animations, colors, and typography.
- Return ONLY the code, formatted properly in a single *Markdown fenced code block*.
- Do NOT include explanations, text, comments, or anything else besides the code.
- And give the whole code in a single HTML file."""


def build_instruction(description: str, stack: Union[str, Stack]) -> str:
    """Render the instruction sent to the model.

    The description and stack value are embedded verbatim. Blank
    descriptions must be rejected by the caller.
    """
    stack_value = stack.value if isinstance(stack, Stack) else stack
    return INSTRUCTION_TEMPLATE.format(description=description, stack=stack_value)
