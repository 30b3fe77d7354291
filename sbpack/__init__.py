# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
sbpack — packages sector-builder FFI build outputs into a release tarball.
"""

__version__ = "0.1.0"
