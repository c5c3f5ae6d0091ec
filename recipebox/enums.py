"""Enumerated recipe facets.

Members are declared in storage order: the ordinal of each member is what
lands in the database, the string value is what goes over the wire.
"""

import enum


class TagType(str, enum.Enum):
    CUISINE = "Cuisine"  # taiwanese, japanese, italian, czech, french
    TYPE = "Type"  # soup, bread, pasta, salad, sweet, salty
    CUSTOM = "Custom"


class WorkspaceNeeded(str, enum.Enum):
    SMALL = "Small"  # a chopping board
    MEDIUM = "Medium"
    LARGE = "Large"  # the whole worktop


class TimeCategory(str, enum.Enum):
    QUICK = "Quick"  # 30 minutes or less
    MEDIUM = "Medium"  # 1-3 hours
    LONG = "Long"  # more than 3 hours
    OVERNIGHT = "Overnight"


class Messiness(str, enum.Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
