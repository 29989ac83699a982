"""Managed blocks in user-owned text files.

A managed block is a fenced region this tool owns inside a file it otherwise
leaves alone (shell rc files, profiles):

    # >>> base-tooling:env >>>
    ...body...
    # <<< base-tooling:env <<<

Applying a block strips every existing instance of its markers and appends
one freshly rendered copy after a single blank line. Content outside the
markers is kept as-is, so applying the same block twice yields byte-identical
output and duplicates left behind by older installers collapse into one.
"""

from dataclasses import dataclass

from base_tooling.core.errors import ManagedBlockError

MARKER_NAMESPACE = "base-tooling"


@dataclass(frozen=True)
class ManagedBlock:
    name: str
    body: str

    @property
    def begin_marker(self) -> str:
        return f"# >>> {MARKER_NAMESPACE}:{self.name} >>>"

    @property
    def end_marker(self) -> str:
        return f"# <<< {MARKER_NAMESPACE}:{self.name} <<<"

    def render(self) -> str:
        """Render the block with its markers, without a trailing newline."""
        body = self.body.strip("\n")
        return f"{self.begin_marker}\n{body}\n{self.end_marker}"


def strip_managed_block(content: str, block: ManagedBlock) -> str:
    """Remove every instance of `block` (markers included) from `content`.

    Raises:
        ManagedBlockError: If a begin marker has no matching end marker
    """
    kept: list[str] = []
    inside = False
    for line in content.splitlines(keepends=True):
        marker = line.strip()
        if inside:
            if marker == block.end_marker:
                inside = False
            continue
        if marker == block.begin_marker:
            inside = True
            continue
        if marker == block.end_marker:
            # orphaned end marker
            continue
        kept.append(line)

    if inside:
        raise ManagedBlockError(
            f"Found '{block.begin_marker}' without a matching end marker",
            hint="Remove the incomplete block by hand and re-run.",
        )
    return "".join(kept)


def apply_managed_block(content: str, block: ManagedBlock) -> str:
    """Return `content` with exactly one up-to-date copy of `block` at the end."""
    base = strip_managed_block(content, block).rstrip("\n")
    prefix = f"{base}\n\n" if base else ""
    return f"{prefix}{block.render()}\n"


def count_managed_blocks(content: str, block: ManagedBlock) -> int:
    """Number of begin markers for `block` in `content`."""
    return sum(1 for line in content.splitlines() if line.strip() == block.begin_marker)
