"""Final "next steps" guidance printed after a project is generated."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

from hozokit_generator.layout import ProjectLayout
from hozokit_generator.utils import console as default_console


def next_steps(
    layout: ProjectLayout,
    node_version: str,
    dependencies_installed: bool,
    docs_url: str = "https://github.com/csalmeida/hozokit",
) -> list[str]:
    """Return the numbered steps the user still has to take.

    The wording depends on whether ``npm install`` already ran.
    """
    theme_path = f"{layout.folder_name}/wp-content/themes/{layout.folder_name}"
    steps = [
        "Setup a webserver capable of running PHP and create a MySQL database for WordPress.\n"
        "   See https://wordpress.org/support/article/how-to-install-wordpress/ to learn more.",
    ]

    if dependencies_installed:
        steps.append(
            f"Change directory to {theme_path}\n"
            "   To start development run [reverse]npm start[/reverse]"
        )
    else:
        steps.append(
            "Install Hozokit Node dependencies for your theme.\n"
            f"  {len(steps) + 1}.1 Change directory to {theme_path}\n"
            f"  {len(steps) + 1}.2 Check you are using Node version {escape(node_version)} "
            "by running [reverse]node --version[/reverse]\n"
            f"  {len(steps) + 1}.3 Run [reverse]npm install[/reverse]"
        )
        steps.append("To start development run [reverse]npm start[/reverse]")

    steps.append(
        "You now have the power to create Twig components instantly!\n"
        "   From the project's parent directory run "
        "[reverse]hozokit-generator component[/reverse]"
    )
    steps.append(f"For more details, checkout Hozokit's setup guide and documentation at {docs_url}")
    return steps


def print_next_steps(
    layout: ProjectLayout,
    node_version: str,
    dependencies_installed: bool,
    docs_url: str = "https://github.com/csalmeida/hozokit",
    out: Console | None = None,
) -> list[str]:
    """Print the steps returned by :func:`next_steps` and return them."""
    target = out or default_console
    steps = next_steps(layout, node_version, dependencies_installed, docs_url)

    target.print()
    target.print("[reverse]NEXT STEPS[/reverse]")
    target.print("Below are some helpful reminders to complete your setup.")
    for number, step in enumerate(steps[:-1], start=1):
        target.print()
        target.print(f"{number}. {step}", highlight=False)
    target.print()
    target.print(steps[-1], highlight=False)
    return steps
