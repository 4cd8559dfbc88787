"""Hello tagstring - the simplest possible example.

Shows attributes merging through nested tags and escaping with entities.
"""

from tagstring import attributed

ATTRIBUTES = {
    "loud": {"font": "Helvetica-Bold", "size": 40},
    "green": {"color": "green"},
    "quiet": {"size": 10},
}

SOURCE = "Testing <loud>this <green>text</green> <quiet>now</quiet></loud> &lt;thing&gt;."


def main() -> None:
    styled = attributed(SOURCE, ATTRIBUTES)

    print("Plain text:", styled.text)
    print()
    for run in styled:
        print(f"{run.text!r:12} {dict(run.attributes)}")


if __name__ == "__main__":
    main()
