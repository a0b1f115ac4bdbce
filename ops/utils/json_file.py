import json
import os


def load(filename):
    # loads the json content of a file
    # (error will be raised if file doesn't exist)

    with open(filename) as file:
        content = json.load(file)

    return content


def load_optional(filename, default=None):
    # same as `load`, but a missing file yields `default`

    if not filename or not os.path.exists(filename):
        return {} if default is None else default
    return load(filename)


def save(filename, content=None):
    # saves the json content to a file

    directory = os.path.dirname(filename)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(filename, "w") as outfile:
        json.dump(
            {} if content is None else content,
            outfile,
            indent=2,
        )

    return filename
