"""Find processor: group fd/find results by directory with an extension summary."""

from .. import config
from .base import Processor

NO_EXT = "no ext"


def group_by_directory(paths: list[str]) -> dict[str, list[str]]:
    """Map directory -> file names, splitting at the last '/'. Bare names go under '.'."""
    by_dir: dict[str, list[str]] = {}
    for path in paths:
        parts = path.rsplit("/", 1)
        if len(parts) == 2:
            dir_name, file_name = parts
        else:
            dir_name, file_name = ".", path
        by_dir.setdefault(dir_name, []).append(file_name)
    return by_dir


def extension_of(path: str) -> str:
    name = path.rsplit("/", 1)[-1]
    # dotfiles like .bashrc have no extension
    if "." not in name[1:]:
        return NO_EXT
    return name.rsplit(".", 1)[1]


def extension_histogram(paths: list[str]) -> dict[str, int]:
    by_ext: dict[str, int] = {}
    for path in paths:
        ext = extension_of(path)
        by_ext[ext] = by_ext.get(ext, 0) + 1
    return by_ext


class FindProcessor(Processor):
    @property
    def name(self) -> str:
        return "find"

    def display_dir(self, dir_path: str) -> str:
        width = config.get("find_dir_width")
        if len(dir_path) > width:
            return "..." + dir_path[-(width - 3) :]
        return dir_path

    def process(self, output: str, pattern: str, max_results: int | None = None) -> str:
        if max_results is None:
            max_results = config.get("find_max_results")
        inline = config.get("find_inline_threshold")

        files = [line for line in self.split_lines(output) if line.strip()]
        if not files:
            return f"No files found matching '{pattern}'"

        by_dir = group_by_directory(files)
        result = [f"📁 Found {len(files)} files in {len(by_dir)} directories:", ""]

        shown = 0
        for dir_path in sorted(by_dir):
            if shown >= max_results:
                result.append(f"... +{len(files) - shown} more results")
                break

            names = by_dir[dir_path]
            dir_display = self.display_dir(dir_path)
            if len(names) <= inline:
                result.append(f"{dir_display}/ ({len(names)})")
                for name in names:
                    result.append(f"  └─ {name}")
            else:
                result.append(f"{dir_display}/ ({len(names)} files)")
                for name in names[:2]:
                    result.append(f"  ├─ {name}")
                result.append(f"  └─ ... +{len(names) - 2} more")
            shown += len(names)

        by_ext = extension_histogram(files)
        if len(by_ext) > 1:
            top = sorted(by_ext.items(), key=lambda x: -x[1])[: config.get("find_max_extensions")]
            ext_desc = ", ".join(
                f"{ext} ({n})" if ext == NO_EXT else f".{ext} ({n})" for ext, n in top
            )
            result.append("")
            result.append(f"📊 Extensions: {ext_desc}")

        return "\n".join(result)
