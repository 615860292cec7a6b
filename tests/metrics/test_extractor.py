"""Tests for per-file metric extraction."""

import pytest

from crate_report.metrics import FileMetrics, MetricExtractor, ParseFailure, count_lines


class TestReferenceScenario:
    """One unsafe fn, one safe fn, one static mut, one unwrap."""

    SOURCE = """\
        static mut COUNTER: i32 = 0;

        unsafe fn bump() {
            COUNTER += 1;
            let _seen = COUNTER;
        }

        fn read(value: Option<i32>) -> i32 {
            let base = 1;
            let extra = value.unwrap();
            base + extra
        }
        """

    def test_counts(self, measure):
        m = measure(self.SOURCE)
        assert m.total_fns == 2
        assert m.unsafe_fns == 1
        assert m.total_statements == 5
        assert m.unsafe_statements == 2
        assert m.static_mut_items == 1
        assert m.unwraps == 1

    def test_line_count(self, measure):
        assert measure(self.SOURCE).total_lines == 12

    def test_path_is_kept(self, measure):
        assert measure(self.SOURCE, path="src/counter.rs").path == "src/counter.rs"


class TestFunctions:
    def test_methods_and_trait_defaults_count(self, measure):
        m = measure("""\
            struct S;
            impl S {
                unsafe fn raw(&self) {}
                fn plain(&self) {}
            }
            trait Shape {
                fn area(&self) -> f64;
                fn name(&self) -> String { String::new() }
            }
            """)
        assert m.total_fns == 3
        assert m.unsafe_fns == 1

    def test_bodiless_signatures_excluded(self, measure):
        m = measure("""\
            trait T {
                unsafe fn dangerous(&self);
            }
            extern "C" {
                fn abort();
            }
            """)
        assert m.total_fns == 0
        assert m.unsafe_fns == 0

    def test_nested_function_counts(self, measure):
        m = measure("""\
            fn outer() {
                fn inner() {}
                inner();
            }
            """)
        assert m.total_fns == 2

    def test_closures_not_counted_but_statements_are(self, measure):
        m = measure("""\
            fn run() {
                let add = |x: i32| {
                    let y = x + 1;
                    y
                };
                add(1);
            }
            """)
        assert m.total_fns == 1
        # let add, add(1); plus let y, y
        assert m.total_statements == 4

    def test_unsafe_qualifier_with_other_modifiers(self, measure):
        m = measure('pub const unsafe extern "C" fn callback() {}\n')
        assert m.total_fns == 1
        assert m.unsafe_fns == 1

    def test_unsafe_impl_is_not_an_unsafe_fn(self, measure):
        m = measure("""\
            struct S;
            unsafe impl Send for S {}
            impl S {
                fn get(&self) {}
            }
            """)
        assert m.unsafe_fns == 0


class TestStatements:
    def test_nested_unsafe_rule(self, measure):
        """Safe-in-unsafe is not unsafe; unsafe-in-unsafe counts once."""
        m = measure("""\
            fn outer() {
                unsafe {
                    let p = 1;
                    {
                        let q = 2;
                    }
                    unsafe {
                        let r = 3;
                    }
                }
            }
            """)
        # outer: 1, outer unsafe block: 3, safe block: 1, inner unsafe block: 1
        assert m.total_statements == 6
        assert m.unsafe_statements == 4

    def test_unsafe_fn_body_is_unsafe_scope(self, measure):
        m = measure("""\
            unsafe fn f(flag: bool) {
                let a = 1;
                if flag {
                    let b = 2;
                }
            }
            """)
        assert m.total_statements == 3
        assert m.unsafe_statements == 2

    def test_trailing_expression_is_a_statement(self, measure):
        m = measure("""\
            fn f(flag: bool) -> i32 {
                if flag {
                    return 1;
                }
                0
            }
            """)
        assert m.total_statements == 3

    def test_comments_and_attributes_are_not_statements(self, measure):
        m = measure("""\
            fn f() {
                // note
                /* block */
                #[allow(unused)]
                let a = 1;
            }
            """)
        assert m.total_statements == 1

    def test_statements_outside_functions_ignored(self, measure):
        m = measure("""\
            const A: i32 = { 1 + 1 };
            static B: i32 = 2;
            """)
        assert m.total_statements == 0

    @pytest.mark.parametrize(
        "source",
        [
            "fn f() { unsafe { a(); b(); } }\n",
            "unsafe fn f() { unsafe { a(); } c(); }\n",
            "fn f() { let x = unsafe { *p }; { let y = 1; } }\n",
        ],
    )
    def test_unsafe_never_exceeds_total(self, measure, source):
        m = measure(source)
        assert 0 <= m.unsafe_statements <= m.total_statements
        assert 0 <= m.unsafe_fns <= m.total_fns


class TestStaticMut:
    def test_only_mutable_statics(self, measure):
        m = measure("""\
            static mut A: u8 = 0;
            static B: u8 = 0;
            pub static mut C: [u8; 4] = [0; 4];
            """)
        assert m.static_mut_items == 2

    def test_nested_static_mut_counts(self, measure):
        m = measure("""\
            fn f() {
                static mut CALLS: u32 = 0;
            }
            """)
        assert m.static_mut_items == 1


class TestUnwraps:
    def test_method_and_path_forms(self, measure):
        m = measure("""\
            fn f(a: Option<i32>, b: Result<i32, ()>) {
                a.unwrap();
                b.unwrap();
                Option::unwrap(a);
                a.map(|x| x + 1).unwrap();
            }
            """)
        assert m.unwraps == 4

    def test_similar_names_do_not_count(self, measure):
        m = measure("""\
            fn f(a: Option<i32>) {
                a.unwrap_or(0);
                a.unwrap_or_default();
                a.expect("value");
                unwrap(a);
            }
            """)
        assert m.unwraps == 0

    def test_any_receiver_counts(self, measure):
        """Without type resolution a user-defined unwrap is counted too."""
        m = measure("""\
            struct Wrapper;
            impl Wrapper {
                fn unwrap(self) -> i32 { 0 }
            }
            fn f(w: Wrapper) -> i32 {
                w.unwrap()
            }
            """)
        assert m.unwraps == 1


class TestMacros:
    def test_macro_bodies_are_opaque(self, measure):
        m = measure("""\
            macro_rules! grab {
                ($e:expr) => { unsafe { $e.unwrap() } };
            }
            fn f(a: Option<i32>) {
                println!("{}", a.unwrap());
                grab!(a);
            }
            """)
        assert m.unwraps == 0
        assert m.unsafe_statements == 0
        assert m.total_statements == 2


class TestLineCount:
    @pytest.mark.parametrize(
        "source,expected",
        [
            ("", 0),
            ("fn a() {}", 1),
            ("fn a() {}\n", 1),
            ("a\nb", 2),
            ("a\nb\n", 2),
            ("\n\n", 2),
        ],
    )
    def test_count_lines(self, source, expected):
        assert count_lines(source) == expected


class TestFailures:
    def test_syntax_error_becomes_parse_failure(self, extractor):
        result = extractor.measure_source("fn broken( {\n", "src/broken.rs")
        assert isinstance(result, ParseFailure)
        assert result.path == "src/broken.rs"
        assert "line" in result.message

    def test_measure_file(self, tmp_path, extractor):
        (tmp_path / "src").mkdir()
        source = tmp_path / "src" / "lib.rs"
        source.write_text("unsafe fn f() {}\n")
        result = extractor.measure_file(source, tmp_path)
        assert isinstance(result, FileMetrics)
        assert result.path == "src/lib.rs"
        assert result.unsafe_fns == 1

    def test_byte_order_mark_is_ignored(self, tmp_path, extractor):
        source = tmp_path / "lib.rs"
        source.write_bytes(b"\xef\xbb\xbffn f() {}\n")
        result = extractor.measure_file(source, tmp_path)
        assert isinstance(result, FileMetrics)
        assert result.total_fns == 1

    def test_invalid_utf8(self, tmp_path, extractor):
        source = tmp_path / "bad.rs"
        source.write_bytes(b"fn f() { let s = \"\xff\xfe\"; }\n")
        result = extractor.measure_file(source, tmp_path)
        assert isinstance(result, ParseFailure)
        assert "UTF-8" in result.message

    def test_oversized_file(self, tmp_path, extractor):
        source = tmp_path / "big.rs"
        source.write_text("fn f() {}\n" * 20)
        result = extractor.measure_file(source, tmp_path, max_bytes=10)
        assert isinstance(result, ParseFailure)
        assert "exceeds" in result.message

    def test_missing_file(self, tmp_path, extractor):
        result = extractor.measure_file(tmp_path / "gone.rs", tmp_path)
        assert isinstance(result, ParseFailure)
        assert result.path == "gone.rs"

    def test_extractor_is_reusable_after_failure(self):
        extractor = MetricExtractor()
        assert isinstance(extractor.measure_source("fn (", "a.rs"), ParseFailure)
        assert isinstance(extractor.measure_source("fn ok() {}", "b.rs"), FileMetrics)
