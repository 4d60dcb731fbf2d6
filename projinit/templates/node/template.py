"""Create a Node.js library, including node:test unit tests."""

description = "Create a Node.js library, including node:test unit tests."

notes = (
    'For more information about the fields asked below, see the package.json '
    'documentation at https://docs.npmjs.com/cli/configuring-npm/package-json'
)

after = (
    "You should now install project dependencies with npm install. "
    "After that, you may run the tests with npm test."
)

warn_on = ["*.js", "lib", "test"]


def template(init, done, *args):
    props = init.process({"type": "node"}, [
        init.prompt("name"),
        init.prompt("description"),
        init.prompt("version"),
        init.prompt("repository"),
        init.prompt("homepage"),
        init.prompt("bugs"),
        init.prompt("licenses"),
        init.prompt("author_name"),
        init.prompt("author_email"),
        init.prompt("author_url"),
        init.prompt("node_version"),
        init.prompt("main"),
        init.prompt("npm_test"),
    ])
    props["keywords"] = []
    props["with_bin"] = bool(init.flags.get("bin"))
    if props["with_bin"]:
        props["bin"] = f"bin/{props['name']}"

    files = init.files_to_copy(props)
    init.add_license_files(files, props["licenses"])
    init.copy_and_process(files, props)
    init.write_package_json("package.json", props)

    done()
