# SPDX-License-Identifier: MIT


class EntityType:
    ENTRY = "entry"
    PROJECT = "project"
