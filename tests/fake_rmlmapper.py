"""
Stand-in for ``java [-D...] -jar rmlmapper.jar <options>`` used by the tests.

Understands the subset of RML used by tests/data: one logical source, one
subject template and one predicate/reference pair. Comment directives in the
mapping (``# fake:<directive>``) inject failure modes:

    sleep=<seconds>     wait before writing output
    exit=<code>         print an error and exit with <code>
    no-output           exit 0 without writing the output file
    no-metadata         skip the metadata file even when -e is given
    garbage-output      write text that is not RDF in any format
    marker-exit-zero    print "No Triples Maps found." but exit 0
    crash               print a Java stack trace header, exit 0
    interleave          alternate stdout/stderr lines, flushing each
"""

import csv
import json
import os
import re
import sys
import time
from urllib.parse import quote

RML = "http://semweb.mmlab.be/ns/rml#"
RR = "http://www.w3.org/ns/r2rml#"

SOURCE_RE = re.compile(r'(?:rml:source|<%ssource>)\s+"([^"]+)"' % re.escape(RML))
TEMPLATE_RE = re.compile(r'(?:rr:template|<%stemplate>)\s+"([^"]+)"' % re.escape(RR))
PREDICATE_RE = re.compile(r"(?:rr:predicate|<%spredicate>)\s+<([^>]+)>" % re.escape(RR))
REFERENCE_RE = re.compile(r'(?:rml:reference|<%sreference>)\s+"([^"]+)"' % re.escape(RML))
DIRECTIVE_RE = re.compile(r"#\s*fake:(\S+)")

PROV_GENERATED = "http://www.w3.org/ns/prov#generatedAtTime"


def parse_args(argv):
    vm_flags = []
    i = 0
    while i < len(argv) and argv[i] != "-jar":
        vm_flags.append(argv[i])
        i += 1
    if i + 1 >= len(argv):
        return None, vm_flags, {}
    jar = argv[i + 1]
    rest = argv[i + 2 :]
    options = dict(zip(rest[::2], rest[1::2]))
    return jar, vm_flags, options


def escape(value):
    return value.replace("\\", "\\\\").replace('"', '\\"')


def render(triples, serialization):
    if serialization == "jsonld":
        nodes = [{"@id": s, p: [{"@value": o}]} for s, p, o in triples]
        return json.dumps(nodes, indent=2)
    return "".join(f'<{s}> <{p}> "{escape(o)}" .\n' for s, p, o in triples)


def generate(mapping):
    source = SOURCE_RE.search(mapping)
    template = TEMPLATE_RE.search(mapping)
    predicate = PREDICATE_RE.search(mapping)
    reference = REFERENCE_RE.search(mapping)
    if not (source and template and predicate and reference):
        return None

    with open(source.group(1), newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))

    triples = []
    for row in rows:
        encoded = {key: quote(value, safe="") for key, value in row.items()}
        subject = template.group(1).format_map(encoded)
        triples.append((subject, predicate.group(1), row[reference.group(1)]))
    return triples


def interleave():
    for i in range(1, 4):
        sys.stdout.write(f"out-{i}\n")
        sys.stdout.flush()
        time.sleep(0.1)
        sys.stderr.write(f"err-{i}\n")
        sys.stderr.flush()
        time.sleep(0.1)


def main(argv):
    jar, vm_flags, options = parse_args(argv)
    if jar is None:
        print("Usage: java [options] -jar jarfile [args...]", file=sys.stderr)
        return 1
    if not os.path.isfile(jar):
        print(f"Error: Unable to access jarfile {jar}", file=sys.stderr)
        return 1

    print(f"JVM properties: {' '.join(vm_flags)}", file=sys.stderr)

    with open(options["-m"], encoding="utf-8") as f:
        mapping = f.read()
    directives = DIRECTIVE_RE.findall(mapping)
    settings = dict(d.split("=", 1) for d in directives if "=" in d)

    if "interleave" in directives:
        interleave()
    if "sleep" in settings:
        time.sleep(float(settings["sleep"]))
    if "exit" in settings:
        print("ERROR be.ugent.rml.cli.Main - Something went wrong", file=sys.stderr)
        return int(settings["exit"])
    if "marker-exit-zero" in directives:
        print("ERROR be.ugent.rml.cli.Main - No Triples Maps found.", file=sys.stderr)
        return 0
    if "crash" in directives:
        print('Exception in thread "main" java.lang.NullPointerException', file=sys.stderr)
        return 0

    triples = generate(mapping)
    if triples is None:
        print("ERROR be.ugent.rml.cli.Main - No Triples Maps found.", file=sys.stderr)
        return 1
    if "no-output" in directives:
        return 0

    serialization = options.get("-s", "nquads")
    with open(options["-o"], "w", encoding="utf-8") as f:
        if "garbage-output" in directives:
            f.write("this is { not rdf <at all\n")
        else:
            f.write(render(triples, serialization))

    if "-e" in options and "no-metadata" not in directives:
        level = options.get("-l", "dataset")
        run = "http://example.com/run"
        metadata = [(run, PROV_GENERATED, f"{len(triples)} statements at level {level}")]
        with open(options["-e"], "w", encoding="utf-8") as f:
            f.write(render(metadata, serialization))

    print(f"INFO be.ugent.rml.cli.Main - Wrote {len(triples)} statements")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
