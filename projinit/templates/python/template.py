"""Create a Python package with a src/ layout and pytest tests."""

description = "Create a Python package with a src/ layout and pytest tests."

after = (
    "You should now create a virtual environment and install the package with "
    'pip install -e ".[test]". After that, you may run the tests with pytest.'
)

warn_on = ["pyproject.toml", "setup.py", "src"]


def template(init, done, *args):
    props = init.process({"type": "python"}, [
        init.prompt("name"),
        init.prompt("description", "The best Python package ever."),
        init.prompt("version"),
        init.prompt("repository"),
        init.prompt("homepage"),
        init.prompt("licenses"),
        init.prompt("author_name"),
        init.prompt("author_email"),
        init.prompt("python_requires"),
        init.prompt("test_command"),
    ])
    props["with_cli"] = bool(init.flags.get("cli"))

    files = init.files_to_copy(props)
    init.add_license_files(files, props["licenses"])
    init.copy_and_process(files, props)

    done()
