"""Run the artifact-resolver command line tool."""

from artifact_resolver.tool.artifact_resolver import main

if __name__ == "__main__":
    main()
