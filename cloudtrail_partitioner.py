#!/usr/bin/env python3

import ctpartition.serverless_function as function


def handle(event, context):
    return function.handle(event, context)


if __name__ == "__main__":
    from ctpartition import cli

    cli()
