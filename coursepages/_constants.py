"""Common literal values used across coursepages.

Capability names and request parameter names are kept here so formats, output
classes, fixtures and tests import the same values without drifting.

Examples
--------
>>> from coursepages import _constants
>>> _constants.CAP_VIEW_HIDDEN_SECTIONS
'moodle/course:viewhiddensections'
>>> _constants.EXPAND_SECTION_PARAM
'expandsection'
"""

CAP_VIEW_HIDDEN_SECTIONS = "moodle/course:viewhiddensections"
CAP_SECTION_VISIBILITY = "moodle/course:sectionvisibility"
CAP_MANAGE_ACTIVITIES = "moodle/course:manageactivities"
CAP_SET_CURRENT_SECTION = "moodle/course:setcurrentsection"
CAP_COURSE_UPDATE = "moodle/course:update"

EXPAND_SECTION_PARAM = "expandsection"
SECTION_PARAM = "section"
