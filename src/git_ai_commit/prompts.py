"""Prompt text for commit message generation."""

# Fixed instructions placed before any user refinement and the diff
INSTRUCTIONS = """You are a git commit message generator. Read the staged changes below and write a commit title and a commit description for them.

- The title is a single line summarizing the change in the imperative mood.
- If the changes are unrelated to each other, use the title "Multiple changes" and list them briefly in the description.
- Leave the description empty if it would add nothing beyond the title.
- Respond with a JSON object with the fields "commitTitle" and "commitDescription"."""


def build_prompt(diff: str, refinement: str = "") -> str:
    """Build the prompt for commit message generation.

    The diff is always included in full, after the instructions and any
    refinement text the user supplied.

    Args:
        diff: The staged diff
        refinement: Accumulated extra instructions from the user

    Returns:
        The complete prompt string
    """
    parts = [INSTRUCTIONS]
    if refinement:
        parts.append(refinement)
    parts.append(f"Staged changes:\n{diff}")
    return "\n\n".join(parts)


def append_refinement(refinement: str, addition: str) -> str:
    """Add a new user instruction to the accumulated refinement text."""
    addition = addition.strip()
    if not addition:
        return refinement
    if not refinement:
        return addition
    return f"{refinement}\n{addition}"
