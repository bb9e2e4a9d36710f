"""Subject and teacher name shortening for narrow timetable views.

Every lookup falls back to the input when there is no entry, so unknown
subjects and teachers are shown in full rather than dropped.
"""

from types import MappingProxyType

SUBJECT_ABBREVIATIONS = MappingProxyType(
    {
        "Mathematik": "Ma",
        "Deutsch": "De",
        "Englisch": "En",
        "Französisch": "Fr",
        "Spanisch": "Sp",
        "Geschichte": "Ge",
        "Erdkunde": "Ek",
        "Biologie": "Bio",
        "Chemie": "Ch",
        "Physik": "Ph",
        "Sport": "Sp",
        "Kunst": "Ku",
        "Musik": "Mu",
        "Religion": "Re",
        "Ethik": "Et",
        "Politik": "Pol",
        "Wirtschaft": "Wi",
        "Informatik": "If",
    }
)

# Short codes used in Klassenbuch entry headers.
REGISTER_ABBREVIATIONS = MappingProxyType(
    {
        "Frau Müller": "IMü",
        "Herr Schmidt": "ISc",
        "Frau Weber": "IWe",
        "Dr. Hoffmann": "IHo",
        "Frau Klein": "IKl",
        "Herr Meyer": "IMe",
    }
)


def subject_abbreviation(subject: str) -> str:
    return SUBJECT_ABBREVIATIONS.get(subject, subject)


def mobile_teacher_abbreviation(teacher_name: str) -> str:
    """
    First initial plus up to three letters of the last name.

    "Anna Weber" -> "A.Web". Single names are returned unchanged.
    """
    if not teacher_name:
        return ""
    parts = teacher_name.split(" ")
    if len(parts) < 2:
        return teacher_name
    return f"{parts[0][:1]}.{parts[-1][:3]}"


def teacher_abbreviation(teacher_name: str) -> str:
    return mobile_teacher_abbreviation(teacher_name)


def register_abbreviation(teacher_name: str) -> str:
    """Klassenbuch register code for a teacher, or the name itself."""
    return REGISTER_ABBREVIATIONS.get(teacher_name, teacher_name)
