"""
Fenced code block extraction from assistant replies.
"""

import re
from dataclasses import dataclass
from typing import List

_FENCE = re.compile(r"```(\w*)\n([\s\S]*?)```")

_EXTENSIONS = {
    "swift": "swift",
    "python": "py",
    "py": "py",
    "javascript": "js",
    "js": "js",
    "typescript": "ts",
    "ts": "ts",
    "html": "html",
    "css": "css",
    "json": "json",
    "yaml": "yml",
    "yml": "yml",
    "markdown": "md",
    "md": "md",
}


@dataclass
class CodeBlock:
    language: str
    code: str


@dataclass
class GeneratedFile:
    name: str
    content: str
    language: str


def extract_code_blocks(text: str) -> List[CodeBlock]:
    """Fenced blocks in order of appearance; untagged blocks are "plaintext"."""
    return [
        CodeBlock(language=match.group(1) or "plaintext", code=match.group(2))
        for match in _FENCE.finditer(text)
    ]


def file_extension(language: str) -> str:
    return _EXTENSIONS.get(language.lower(), "txt")


def generated_files(text: str) -> List[GeneratedFile]:
    """Code blocks as files named ``code_<n>.<ext>``."""
    files = []
    for index, block in enumerate(extract_code_blocks(text), start=1):
        files.append(GeneratedFile(
            name=f"code_{index}.{file_extension(block.language)}",
            content=block.code,
            language=block.language,
        ))
    return files
