from simas_app.models import Student
from simas_app.services import merge_imported_students
from simas_app.services.roster import class_labels, students_in_class


def test_merge_skips_known_external_ids():
    existing = [Student(external_id="101", display_name="Ana", class_label="7A")]
    incoming = [
        Student(external_id="101", display_name="Ana Again", class_label="7B"),
        Student(external_id="102", display_name="Budi", class_label="7A"),
    ]

    merged = merge_imported_students(existing, incoming)

    assert [student.external_id for student in merged] == ["101", "102"]
    assert merged[0].display_name == "Ana"


def test_merge_collapses_duplicates_within_one_batch():
    incoming = [
        Student(external_id="101", display_name="Ana"),
        Student(external_id="101", display_name="Ana Copy"),
    ]

    merged = merge_imported_students([], incoming)

    assert len(merged) == 1
    assert merged[0].display_name == "Ana"


def test_merge_drops_rows_without_name_or_id():
    incoming = [
        Student(external_id="", display_name="No Id"),
        Student(external_id="103", display_name="  "),
        Student(external_id="104", display_name="Citra"),
    ]

    merged = merge_imported_students([], incoming)

    assert [student.external_id for student in merged] == ["104"]


def test_merge_leaves_existing_list_untouched():
    existing = [Student(external_id="101", display_name="Ana")]

    merge_imported_students(existing, [Student(external_id="102", display_name="Budi")])

    assert len(existing) == 1


def test_class_labels_are_sorted_and_unique():
    students = [
        Student(external_id="1", display_name="A", class_label="8B"),
        Student(external_id="2", display_name="B", class_label="7A"),
        Student(external_id="3", display_name="C", class_label="8B"),
    ]

    assert class_labels(students) == ["7A", "8B"]
    assert [s.external_id for s in students_in_class(students, "8B")] == ["1", "3"]
    assert len(students_in_class(students, None)) == 3


def test_merge_stores_trimmed_ids_so_later_imports_match():
    first = merge_imported_students([], [Student(external_id="101 ", display_name="Ana")])
    second = merge_imported_students(first, [Student(external_id="101", display_name="Ana")])

    assert [student.external_id for student in second] == ["101"]


def test_merge_matches_existing_ids_with_whitespace():
    existing = [Student(external_id=" 101", display_name="Ana")]

    merged = merge_imported_students(existing, [Student(external_id="101", display_name="Ana")])

    assert len(merged) == 1
