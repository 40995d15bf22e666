"""Constants and defaults.

Note: Collection and field names mirror the deployed document format, keep
them here instead of spreading string literals across repositories.
"""

COURSES = "Courses"
STUDENTS = "Students"
SESSIONS = "Sessions"
ATTENDANCE = "Attendance"

# Course document fields
COURSE_NAME = "courseName"
COURSE_SECTION = "courseSection"
COURSE_OWNER = "uid"

# Student document fields
FIRST_NAME = "firstName"
LAST_NAME = "lastName"

# Session document fields
SESSION_START = "sessionStart"
GRACE_PERIOD = "gracePeriod"

# Attendance document fields
COURSE_REF = "courseRef"
STUDENT_REF = "studentRef"
SESSION_REF = "sessionRef"
STATUS = "status"

GENERATED_ID_LENGTH = 20
DEFAULT_SNAPSHOT_TIMEOUT_SECONDS = 10.0
STREAM_HEARTBEAT_SECONDS = 15.0
