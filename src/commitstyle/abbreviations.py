"""Words and phrases that have a shorter accepted spelling in commit titles.

Keys are matched case-insensitively on word boundaries against the subject of
an over-long title; values are the suggested replacements.
"""

from __future__ import annotations

ABBREVIATIONS: dict[str, str] = {
    "ability": "capability",
    "across": "x-",
    "administrator": "admin",
    "alternative": "alt",
    "ambiguous": "ambig",
    "application": "app",
    "applications": "apps",
    "argument": "arg",
    "arguments": "args",
    "as far as i know": "afaik",
    "as soon as possible": "asap",
    "assembly": "asm",
    "asynchronous": "async",
    "attribute": "attr",
    "attributes": "attrs",
    "authentication": "authn",
    "authorization": "authz",
    "binaries": "bins",
    "binary": "bin",
    "button": "btn",
    "certificate": "cert",
    "command": "cmd",
    "commands": "cmds",
    "configuration": "config",
    "connection": "conn",
    "context": "ctx",
    "continuous integration": "CI",
    "control": "ctrl",
    "database": "DB",
    "dependencies": "deps",
    "dependency": "dep",
    "description": "desc",
    "destination": "dest",
    "development": "dev",
    "directories": "dirs",
    "directory": "dir",
    "document": "doc",
    "documentation": "docs",
    "environment": "env",
    "environments": "envs",
    "error": "err",
    "example": "e.g.",
    "executable": "exe",
    "expression": "expr",
    "extension": "ext",
    "function": "func",
    "functions": "funcs",
    "identifier": "id",
    "implement": "impl",
    "implementation": "impl",
    "information": "info",
    "initialize": "init",
    "initialization": "init",
    "instead of": "vs",
    "javascript": "JS",
    "library": "lib",
    "libraries": "libs",
    "maximum": "max",
    "message": "msg",
    "messages": "msgs",
    "minimum": "min",
    "number": "num",
    "operating system": "OS",
    "package": "pkg",
    "packages": "pkgs",
    "parameter": "param",
    "parameters": "params",
    "previous": "prev",
    "production": "prod",
    "properties": "props",
    "property": "prop",
    "reference": "ref",
    "references": "refs",
    "regular expression": "regex",
    "repositories": "repos",
    "repository": "repo",
    "request": "req",
    "response": "resp",
    "source": "src",
    "specification": "spec",
    "statistics": "stats",
    "string": "str",
    "synchronize": "sync",
    "synchronous": "sync",
    "temporary": "tmp",
    "typescript": "TS",
    "utilities": "utils",
    "utility": "util",
    "variable": "var",
    "variables": "vars",
    "version": "ver",
    "with": "w/",
    "without": "w/o",
}
