import pytest

from school_api.services.query import (
    COURSE_RELATIONS,
    STUDENT_RELATIONS,
    TEACHER_RELATIONS,
    FetchSpec,
    IncludeNode,
    SortDirection,
    build_include_tree,
    parse_fetch_spec,
    parse_positive_int,
    parse_sort,
    split_populate,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, 10),
        ("", 10),
        ("abc", 10),
        ("0", 10),
        ("-5", 10),
        ("25", 25),
        (" 7", 7),
        ("12abc", 12),
    ],
)
def test_parse_positive_int(raw, expected):
    assert parse_positive_int(raw, 10) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, SortDirection.asc),
        ("asc", SortDirection.asc),
        ("DESC", SortDirection.asc),
        ("descending", SortDirection.asc),
        ("desc", SortDirection.desc),
    ],
)
def test_parse_sort_only_exact_desc_is_descending(raw, expected):
    assert parse_sort(raw) == expected


def test_split_populate_trims_and_drops_empty_tokens():
    assert split_populate(" CourseId , StudentId,,") == ["CourseId", "StudentId"]
    assert split_populate(None) == []


def test_teacher_course_token_includes_courses_only():
    assert build_include_tree(["CourseId"], TEACHER_RELATIONS) == (IncludeNode("courses"),)


def test_teacher_student_token_nests_students_under_courses():
    expected = (IncludeNode("courses", (IncludeNode("students"),)),)
    assert build_include_tree(["StudentId"], TEACHER_RELATIONS) == expected
    assert build_include_tree(["CourseId", "StudentId"], TEACHER_RELATIONS) == expected


def test_include_tree_ignores_token_order_and_repeats():
    forward = build_include_tree(["CourseId", "StudentId"], TEACHER_RELATIONS)
    backward = build_include_tree(["StudentId", "CourseId", "StudentId"], TEACHER_RELATIONS)
    assert forward == backward


def test_unknown_tokens_are_ignored():
    assert build_include_tree(["Nope", "teacherid"], TEACHER_RELATIONS) == ()


def test_student_listing_always_includes_course():
    assert build_include_tree([], STUDENT_RELATIONS) == (IncludeNode("course"),)
    assert build_include_tree(["CourseId"], STUDENT_RELATIONS) == (IncludeNode("course"),)


def test_student_teacher_token_nests_teacher_under_course():
    expected = (IncludeNode("course", (IncludeNode("teacher"),)),)
    assert build_include_tree(["TeacherId"], STUDENT_RELATIONS) == expected
    assert build_include_tree(["TeacherId", "CourseId"], STUDENT_RELATIONS) == expected


def test_course_tokens_are_siblings():
    tree = build_include_tree(["TeacherId", "StudentId"], COURSE_RELATIONS)
    assert tree == (IncludeNode("students"), IncludeNode("teacher"))


def test_fetch_spec_offset_and_total_pages():
    spec = FetchSpec(limit=10, page=3, direction=SortDirection.asc)
    assert spec.offset == 20
    assert spec.total_pages(25) == 3
    assert spec.total_pages(0) == 0
    assert spec.order_by == "created_at"


def test_parse_fetch_spec_defaults():
    spec = parse_fetch_spec(None, None, None, None, TEACHER_RELATIONS)
    assert (spec.limit, spec.page, spec.offset) == (10, 1, 0)
    assert spec.direction == SortDirection.asc
    assert spec.includes == ()


def test_parse_fetch_spec_reads_every_parameter():
    spec = parse_fetch_spec("2", "5", "desc", "CourseId", TEACHER_RELATIONS)
    assert (spec.limit, spec.page, spec.offset) == (5, 2, 5)
    assert spec.direction == SortDirection.desc
    assert spec.includes == (IncludeNode("courses"),)
