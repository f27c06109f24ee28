"""Custom Pants target types for Orihime link artifacts."""

from __future__ import annotations

from pants.engine.target import (
    COMMON_TARGET_FIELDS,
    MultipleSourcesField,
    StringField,
    StringSequenceField,
    Target,
)


class OrihimeObjectSourcesField(MultipleSourcesField):
    alias = "sources"
    default = ("*.o", "*.a")
    expected_file_extensions = (".o", ".a")
    help = "Object files and static archives linked into the binary, in order."


class OrihimeDriverFlagsField(StringSequenceField):
    alias = "driver_flags"
    default = ()
    help = (
        "Driver flags for this link, e.g. `-fno-exceptions`, `-r`, `-flto=thin`, `-L<dir>`. "
        "Applied after the `[orihime].args` option."
    )


class OrihimeOutputNameField(StringField):
    alias = "output_name"
    default = None
    help = "File name of the linked output. Defaults to the target name."


class OrihimeBinary(Target):
    alias = "orihime_binary"
    core_fields = (
        *COMMON_TARGET_FIELDS,
        OrihimeObjectSourcesField,
        OrihimeDriverFlagsField,
        OrihimeOutputNameField,
    )
    help = "A statically linked Orihime executable built from prebuilt object files."
