import unittest

from ShoLang.Config import Options
from ShoLang.Environment import Environment
from ShoLang.Evaluator import evaluate
from ShoLang.Objects import NULL, BoundMethod, Class, ErrorSignal, Function, Instance, Integer, String
from ShoLang.Parser import parse

CHAIN = Options(method_resolution="chain")

ANIMAL = """
class Animal {
    let constructor = func(self, name) { this.name = name; }
    let speak = func(self) { return this.name; }
}
"""


def run(test, text, options=None, env=None):
    program, errors = parse(text)
    test.assertEqual([], errors, f"unexpected parser errors for {text!r}")
    return evaluate(program, env if env is not None else Environment(), options)


class ShoTestCase(unittest.TestCase):

    def assertString(self, expected, obj):
        self.assertIsInstance(obj, String, f"expected String, got {obj!r}")
        self.assertEqual(expected, obj.value)

    def assertError(self, message, obj):
        self.assertIsInstance(obj, ErrorSignal, f"expected ErrorSignal, got {obj!r}")
        self.assertEqual(message, obj.message)


class ObjectTestCase(ShoTestCase):

    def test_constructor_and_method(self):
        self.assertString("Rex", run(self, ANIMAL + 'let a = new Animal("Rex"); a.speak()'))

    def test_class_statement_yields_null(self):
        self.assertIs(NULL, run(self, "class A { }"))

    def test_class_value(self):
        result = run(self, "class A { let f = func() { 1 } } A")
        self.assertIsInstance(result, Class)
        self.assertEqual("class A", result.inspect())
        self.assertEqual(["f"], list(result.methods))
        self.assertIsNone(result.superclass)

    def test_instance_value(self):
        result = run(self, ANIMAL + 'new Animal("Rex")')
        self.assertIsInstance(result, Instance)
        self.assertEqual("Animal instance", result.inspect())
        self.assertEqual("Rex", result.properties["name"].value)

    def test_methods_are_copied_into_instance(self):
        result = run(self, ANIMAL + 'new Animal("Rex")')
        self.assertIsInstance(result.properties["speak"], Function)
        self.assertIs(result.cls.methods["speak"], result.properties["speak"])

    def test_this_without_self_parameter(self):
        source = """
        class Counter {
            let constructor = func(start) { this.count = start; }
            let incr = func() { this.count = this.count + 1; this.count }
        }
        let c = new Counter(5);
        c.incr();
        c.incr()
        """
        self.assertEqual(7, run(self, source).value)

    def test_instances_are_independent(self):
        source = ANIMAL + 'let a = new Animal("Rex"); let b = new Animal("Tom"); a.speak() + b.speak()'
        self.assertString("RexTom", run(self, source))

    def test_class_without_constructor(self):
        source = 'class Box { let get = func() { this.v } } let b = new Box(); b.v = 3; b.get()'
        self.assertEqual(3, run(self, source).value)

    def test_method_calls_another_method(self):
        source = """
        class Greeter {
            let constructor = func(name) { this.name = name; }
            let name_of = func() { this.name }
            let greet = func() { "hi " + this.name_of() }
        }
        new Greeter("Ada").greet()
        """
        self.assertString("hi Ada", run(self, source))

    def test_property_assignment_overrides_copied_method(self):
        source = ANIMAL + """
        let a = new Animal("Rex");
        a.speak = func() { "replaced " + this.name };
        let b = new Animal("Tom");
        a.speak() + " " + b.speak()
        """
        self.assertString("replaced Rex Tom", run(self, source))

    def test_method_extracted_from_instance_loses_this(self):
        source = ANIMAL + 'let a = new Animal("Rex"); let f = a.speak; f()'
        self.assertError("'this' not found in current context", run(self, source))

    def test_bound_method_fallback(self):
        env = Environment()
        run(self, ANIMAL, env=env)
        bare = Instance(env.get("Animal"))
        bare.properties["name"] = String("Tom")
        env.set("bare", bare)

        method = run(self, "bare.speak", env=env)
        self.assertIsInstance(method, BoundMethod)
        self.assertIs(bare, method.instance)
        self.assertEqual("bound method", method.inspect())

        self.assertString("Tom", run(self, "bare.speak()", env=env))
        self.assertString("Tom", run(self, "let m = bare.speak; m()", env=env))

    def test_constructor_error_propagates(self):
        source = "class A { let constructor = func() { missing } } new A()"
        self.assertError("identifier not found: missing", run(self, source))

    def test_return_in_constructor_still_yields_instance(self):
        source = "class A { let constructor = func() { this.v = 1; return 5; this.v = 2; } } let a = new A(); a.v"
        self.assertEqual(1, run(self, source).value)

    def test_new_requires_class(self):
        self.assertError("not a class: INTEGER", run(self, "let x = 5; new x()"))

    def test_superclass_must_be_class(self):
        self.assertError("superclass must be a class, got INTEGER", run(self, "let A = 1; class B extends A { }"))

    def test_unknown_superclass(self):
        self.assertError("identifier not found: Nope", run(self, "class B extends Nope { }"))

    def test_missing_property(self):
        self.assertError("property missing not found", run(self, "class A { } let a = new A(); a.missing"))

    def test_new_argument_error(self):
        self.assertError("identifier not found: nope", run(self, ANIMAL + "new Animal(nope)"))


INHERITANCE = """
class A {
    let constructor = func(self, n) { this.n = n; }
    let hello = func() { "A" }
}
class B extends A {
    let double = func() { this.n * 2 }
}
"""


class InheritanceTestCase(ShoTestCase):

    def test_superclass_recorded(self):
        result = run(self, INHERITANCE + "B")
        self.assertEqual("A", result.superclass.name)

    def test_superclass_methods_not_inherited_by_default(self):
        self.assertError("property hello not found", run(self, INHERITANCE + "let b = new B(1); b.hello()"))

    def test_superclass_constructor_not_run_by_default(self):
        self.assertError("property n not found", run(self, INHERITANCE + "let b = new B(21); b.double()"))

    def test_superclass_methods_with_chain(self):
        self.assertString("A", run(self, INHERITANCE + "let b = new B(1); b.hello()", options=CHAIN))

    def test_inherited_constructor_with_chain(self):
        result = run(self, INHERITANCE + "let b = new B(21); b.double()", options=CHAIN)
        self.assertIsInstance(result, Integer)
        self.assertEqual(42, result.value)

    def test_super_in_constructor(self):
        source = """
        class A { }
        class B extends A { let constructor = func() { this.parent = super; } }
        let b = new B();
        b.parent
        """
        result = run(self, source)
        self.assertIsInstance(result, Class)
        self.assertEqual("A", result.name)

    def test_super_unbound_in_methods_by_default(self):
        source = """
        class A { }
        class B extends A { let parent = func() { super } }
        let b = new B();
        b.parent()
        """
        self.assertError("'super' not found in current context", run(self, source))

    def test_super_property_needs_chain(self):
        source = """
        class A { let name = func() { "A" } }
        class B extends A { let constructor = func() { this.label = super.name; } }
        new B()
        """
        self.assertError("property access not supported on CLASS", run(self, source))

    def test_super_method_call_with_chain(self):
        source = """
        class A { let name = func() { "A" } }
        class B extends A { let name = func() { super.name() + "B" } }
        let b = new B();
        b.name()
        """
        self.assertString("AB", run(self, source, options=CHAIN))

    def test_super_method_sees_receiver(self):
        source = """
        class A { let describe = func() { "I am " + this.name } }
        class B extends A {
            let constructor = func(name) { this.name = name; }
            let describe = func() { super.describe() + "!" }
        }
        let b = new B("Rex");
        b.describe()
        """
        self.assertString("I am Rex!", run(self, source, options=CHAIN))

    def test_three_level_chain(self):
        source = """
        class A { let who = func() { "A" } }
        class B extends A { let who = func() { super.who() + "B" } }
        class C extends B { let who = func() { super.who() + "C" } }
        let c = new C();
        c.who()
        """
        self.assertString("ABC", run(self, source, options=CHAIN))

    def test_missing_method_on_super(self):
        source = """
        class A { }
        class B extends A { let f = func() { super.nothing } }
        let b = new B();
        b.f()
        """
        self.assertError("property nothing not found", run(self, source, options=CHAIN))


if __name__ == '__main__':
    unittest.main()
