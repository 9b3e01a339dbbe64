#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

import contextlib
import os
import sys

from collections.abc import Iterable
from datetime import datetime
from tempfile import NamedTemporaryFile


###################################################################################################
# print to stderr
def eprint(*args, **kwargs):
    filteredArgs = (
        {k: v for (k, v) in kwargs.items() if k not in ("timestamp", "flush")} if isinstance(kwargs, dict) else {}
    )
    if "timestamp" in kwargs and kwargs["timestamp"]:
        print(
            datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
            *args,
            file=sys.stderr,
            **filteredArgs,
        )
    else:
        print(*args, file=sys.stderr, **filteredArgs)
    if "flush" in kwargs and kwargs["flush"]:
        sys.stderr.flush()


###################################################################################################
# flatten a collection, but don't split strings
def flatten(coll):
    for i in coll:
        if isinstance(i, Iterable) and not isinstance(i, str):
            for subc in flatten(i):
                yield subc
        else:
            yield i


###################################################################################################
# if the object is an iterable, return it, otherwise return a tuple with it as a single element.
# useful if you want to user either a scalar or an array in a loop, etc.
def get_iterable(x):
    if isinstance(x, Iterable) and not isinstance(x, str):
        return x
    else:
        return (x,)


###################################################################################################
# convenient boolean argument parsing
def str2bool(v):
    if isinstance(v, bool):
        return v
    elif isinstance(v, str):
        if v.lower() in ("yes", "true", "t", "y", "1"):
            return True
        elif v.lower() in ("no", "false", "f", "n", "0", ""):
            return False
        else:
            raise ValueError("Boolean value expected")
    elif not v:
        return False
    else:
        raise ValueError("Boolean value expected")


###################################################################################################
# a context manager returning a temporary filename which is deleted upon leaving the context
@contextlib.contextmanager
def temporary_filename(suffix=None, dir=None):
    tmp_name = None
    try:
        f = NamedTemporaryFile(suffix=suffix, dir=dir, delete=False)
        tmp_name = f.name
        f.close()
        yield tmp_name
    finally:
        if tmp_name and os.path.exists(tmp_name):
            os.unlink(tmp_name)


###################################################################################################
# determine if a program/script exists and is executable in the system path
def which(cmd, debug=False):
    result = any(
        os.access(os.path.join(path, cmd), os.X_OK) for path in os.environ.get("PATH", "").split(os.pathsep) if path
    )
    if debug:
        eprint(f"which {cmd} returned {result}")
    return result


###################################################################################################
# true if running with administrative rights
def is_privileged():
    return hasattr(os, "geteuid") and (os.geteuid() == 0)


