"""Default name tables for the hoisting environment.

SPECIAL_FORMS are the special-form names of the target language; they are
syntax, not values, so the walker never hoists them.

CORE_REFERS maps unqualified names that are referred from the core namespace
into every compilation unit. Hosts with a different set of referred names
pass their own table to HoistEnvironment.
"""

from formula.types.symbol import Symbol

CORE_NAMESPACE = "cljs.core"

SPECIAL_FORMS = frozenset(
    Symbol(name)
    for name in (
        "if", "def", "fn*", "do", "let*", "loop*", "letfn*", "throw", "try",
        "catch", "finally", "recur", "new", "set!", "ns", "deftype*",
        "defrecord*", ".", "js*", "&", "quote", "case*", "var", "ns*",
    )
)

_CORE_NAMES = """
    + - * / < > <= >= = == not= inc dec max min mod rem quot
    zero? pos? neg? even? odd? nil? some? true? false? not identity
    list list* vector hash-map hash-set set vec seq first second rest next last
    nth nthrest cons conj assoc dissoc get get-in assoc-in update update-in
    keys vals count empty? contains? into concat map mapv filter filterv remove
    reduce apply partial comp juxt range take drop take-while drop-while
    sort sort-by reverse interleave interpose partition group-by frequencies
    str subs keyword symbol name namespace println prn pr-str deref
    atom reset! swap! merge merge-with select-keys zipmap distinct flatten
    every? some not-any? not-every? boolean int double
""".split()

CORE_REFERS = {Symbol(name): CORE_NAMESPACE for name in _CORE_NAMES}
