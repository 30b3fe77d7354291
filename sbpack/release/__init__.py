# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Release subsystem for sbpack.

Provides artifact discovery, the scoped staging directory, archive creation
and archive verification. Artifacts are opaque: nothing here builds, parses or
validates their contents.
"""
