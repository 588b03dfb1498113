import unittest

from pageassets.catalog import LibraryCatalog
from pageassets.config import settings
from pageassets.runtime.registry import AssetRegistry, is_stylesheet

JQUERY = "https://code.jquery.com/jquery-3.4.1.min.js"
VUE_DEBUG = "https://cdnjs.cloudflare.com/ajax/libs/vue/2.6.10/vue.js"
VUE_PROD = "https://cdnjs.cloudflare.com/ajax/libs/vue/2.6.10/vue.min.js"


class TestAdd(unittest.TestCase):
    def test_duplicate_urls_render_once(self) -> None:
        registry = AssetRegistry(debug=False)
        registry.add("a.js")
        registry.add(["a.js", "b.js"])
        registry.add_script("a.js")
        registry.add(["jquery", JQUERY, "jquery"])

        rendered = registry.render_scripts()
        self.assertEqual(rendered.count('src="a.js"'), 1)
        self.assertEqual(rendered.count(JQUERY), 1)
        self.assertEqual(registry.scripts, ())

    def test_insertion_order_is_render_order(self) -> None:
        registry = AssetRegistry(debug=False)
        registry.add(["b.js", "a.js", "b.js", "c.js"])
        self.assertEqual(registry.scripts, ("b.js", "a.js", "c.js"))

    def test_stylesheet_classification(self) -> None:
        self.assertTrue(is_stylesheet("site.css"))
        self.assertTrue(is_stylesheet("/static/site.css?v=12"))
        self.assertFalse(is_stylesheet("site.css.map"))
        self.assertFalse(is_stylesheet("site.CSS"))
        self.assertFalse(is_stylesheet("app.js"))

        registry = AssetRegistry(debug=False)
        registry.add(["site.css", "theme.css?v=3", "app.js"])
        self.assertEqual(registry.styles, ("site.css", "theme.css?v=3"))
        self.assertEqual(registry.scripts, ("app.js",))

    def test_add_style_direct(self) -> None:
        registry = AssetRegistry(debug=False)
        registry.add_style("print.css")
        registry.add_style("print.css")
        self.assertEqual(registry.render_styles(), '<link rel="stylesheet" href="print.css">\n')

    def test_unknown_reference_is_treated_as_script(self) -> None:
        registry = AssetRegistry(debug=False)
        registry.add("no-such-library")
        self.assertEqual(registry.scripts, ("no-such-library",))
        self.assertEqual(registry.included_libraries, frozenset())

    def test_none_is_skipped_and_scalars_stringified(self) -> None:
        registry = AssetRegistry(debug=False)
        registry.add(None)
        registry.add([None, 42])
        self.assertEqual(registry.scripts, ("42",))

    def test_undecodable_bytes_do_not_raise(self) -> None:
        registry = AssetRegistry(debug=False)
        registry.add([b"app.js", b"\xff.js"])
        self.assertEqual(registry.scripts, ("app.js", "�.js"))

    def test_debug_prod_groups(self) -> None:
        registry = AssetRegistry(debug=False)
        registry.add({"debug": ["x.js"], "prod": ["y.js"]})
        self.assertEqual(registry.render_scripts(), '<script src="y.js"></script>\n')

        registry.debug = True
        registry.add({"debug": ["x.js"], "prod": ["y.js"]})
        self.assertEqual(registry.render_scripts(), '<script src="x.js"></script>\n')

    def test_debug_groups_follow_process_flag(self) -> None:
        registry = AssetRegistry()
        registry.add(["a.js", {"debug": "x.js", "prod": "y.js"}])
        self.assertEqual(registry.scripts, ("a.js", "y.js"))

        settings.debug = True
        registry.add({"debug": "z.js"})
        self.assertEqual(registry.scripts, ("a.js", "y.js", "z.js"))

    def test_nested_groups(self) -> None:
        registry = AssetRegistry(debug=True)
        registry.add({"debug": ["a.js", {"prod": "b.js", "debug": "c.css"}], "other": "d.js"})
        self.assertEqual(registry.scripts, ("a.js", "d.js"))
        self.assertEqual(registry.styles, ("c.css",))


class TestLibraries(unittest.TestCase):
    def test_expand_library_with_dependencies(self) -> None:
        registry = AssetRegistry(debug=False)
        registry.add("eModal")
        self.assertEqual(
            registry.styles,
            ("https://maxcdn.bootstrapcdn.com/bootstrap/4.4.1/css/bootstrap.min.css",),
        )
        self.assertEqual(
            registry.scripts,
            (
                "https://maxcdn.bootstrapcdn.com/bootstrap/4.4.1/js/bootstrap.min.js",
                JQUERY,
                "https://rawgit.com/saribe/eModal/master/dist/eModal.min.js",
            ),
        )
        self.assertEqual(registry.included_libraries, {"eModal", "bootstrap", "jquery"})

    def test_library_with_variants(self) -> None:
        prod = AssetRegistry(debug=False)
        prod.add("vue")
        self.assertEqual(prod.scripts, (VUE_PROD,))

        dev = AssetRegistry(debug=True)
        dev.add("vue")
        self.assertEqual(dev.scripts, (VUE_DEBUG,))

    def test_cyclic_libraries_terminate(self) -> None:
        catalog = LibraryCatalog({
            "a": ["a", "b", "a.js"],
            "b": ["a", "b.css", "shared.js"],
            "c": ["shared.js", "b"],
        })
        registry = AssetRegistry(catalog=catalog, debug=False)
        registry.add(["a", "c", "a"])

        self.assertEqual(registry.scripts, ("shared.js", "a.js"))
        self.assertEqual(registry.styles, ("b.css",))
        self.assertEqual(registry.included_libraries, {"a", "b", "c"})

    def test_library_included_once_per_registry(self) -> None:
        registry = AssetRegistry(debug=False)
        registry.add("jquery")
        registry.render_scripts()

        # Library set survives flush
        registry.add("jquery")
        self.assertEqual(registry.render_scripts(), "")

    def test_expand_unknown_library_is_noop(self) -> None:
        registry = AssetRegistry(debug=False)
        registry.expand_library("missing")
        self.assertEqual(registry.scripts, ())
        self.assertNotIn("missing", registry.included_libraries)


class TestInlineScripts(unittest.TestCase):
    def test_render_scripts_output(self) -> None:
        registry = AssetRegistry(debug=False)
        registry.add(["a.js", "b.js"])
        registry.add_inline_script("one();")
        registry.add_inline_script("two();")

        self.assertEqual(
            registry.render_scripts(),
            '<script src="a.js"></script>\n'
            '<script src="b.js"></script>\n'
            "<script>\none();\ntwo();\n</script>",
        )

    def test_flush_twice_and_dedup_key_survives(self) -> None:
        registry = AssetRegistry(debug=False)
        registry.add("a.js")
        registry.add_inline_script("init();", dedup_key="init")
        registry.add_inline_script("init();", dedup_key="init")

        first = registry.render_scripts(flush=True)
        self.assertEqual(first.count("init();"), 1)
        self.assertEqual(registry.render_scripts(flush=True), "")

        registry.add_inline_script("init();", dedup_key="init")
        self.assertEqual(registry.render_scripts(), "")

    def test_scripts_without_key_repeat(self) -> None:
        registry = AssetRegistry(debug=False)
        registry.add_inline_script("tick();")
        registry.add_inline_script("tick();")
        self.assertEqual(registry.inline_scripts, ("tick();", "tick();"))

    def test_render_without_flush_preserves(self) -> None:
        registry = AssetRegistry(debug=False)
        registry.add("a.js")
        registry.add_inline_script("x();")

        first = registry.render_scripts(flush=False)
        self.assertEqual(registry.render_scripts(flush=False), first)
        self.assertEqual(registry.render_scripts(), first)
        self.assertEqual(registry.render_scripts(), "")

    def test_url_quotes_are_escaped(self) -> None:
        registry = AssetRegistry(debug=False)
        registry.add_script('a".js')
        self.assertEqual(registry.render_scripts(), '<script src="a&quot;.js"></script>\n')


class TestInlineStyles(unittest.TestCase):
    def test_raw_and_selector_blocks(self) -> None:
        registry = AssetRegistry(debug=False)
        registry.add_style("site.css")
        registry.add_inline_style(".a { color: blue }")
        registry.add_inline_style({"color": "red", "fontSize": "12px"}, "div")

        self.assertEqual(
            registry.render_styles(),
            '<link rel="stylesheet" href="site.css">\n'
            "<style>\n"
            ".a { color: blue }\n"
            "div { color:red;font-size:12px; }\n"
            "</style>",
        )
        self.assertEqual(registry.render_styles(), "")

    def test_repeated_selector_is_appended(self) -> None:
        registry = AssetRegistry(debug=False)
        registry.add_inline_style("color: red;", "p")
        registry.add_inline_style({"margin": "0"}, "p")
        self.assertEqual(registry.get_inline_style("p"), "color: red;\nmargin:0;")

    def test_raw_block_is_appended(self) -> None:
        registry = AssetRegistry(debug=False)
        registry.add_inline_style("body { margin: 0 }")
        registry.add_inline_style("h1 { margin: 0 }", "")
        self.assertEqual(registry.get_inline_style(None), "body { margin: 0 }\nh1 { margin: 0 }")

    def test_empty_css_with_selector_is_ignored(self) -> None:
        registry = AssetRegistry(debug=False)
        registry.add_inline_style({}, "div")
        registry.add_inline_style("   ", "span")
        self.assertFalse(registry.has_inline_style("div"))
        self.assertFalse(registry.has_inline_style("span"))
        self.assertEqual(registry.render_styles(), "")

    def test_has_and_get_inline_style(self) -> None:
        registry = AssetRegistry(debug=False)
        self.assertFalse(registry.has_inline_style(".x"))
        self.assertIsNone(registry.get_inline_style(".x"))

        registry.add_inline_style(registry.new_style({"color": "red"}), ".x")
        self.assertTrue(registry.has_inline_style(".x"))
        self.assertEqual(registry.get_inline_style(".x"), "color:red;")

    def test_render_styles_without_flush(self) -> None:
        registry = AssetRegistry(debug=False)
        registry.add_inline_style({"color": "red"}, "div")
        first = registry.render_styles(flush=False)
        self.assertTrue(registry.has_inline_style("div"))
        self.assertEqual(registry.render_styles(), first)
        self.assertFalse(registry.has_inline_style("div"))


if __name__ == "__main__":
    unittest.main()
