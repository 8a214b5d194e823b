"""Registry of binding-aware forms for the hoisting walker.

Maps head Symbols to handlers called as handler(form, scope, ctx, walk_fn).
The walker consults this table before treating a call form as an ordinary
application. UNSUPPORTED_FORMS are definitional forms that cannot appear in
a closure that is called again and again.
"""

from formula.types.symbol import Symbol
from formula.hoisting.walk_forms.dot_form import walk_dot
from formula.hoisting.walk_forms.try_form import walk_try
from formula.hoisting.walk_forms.binding_forms import walk_let, walk_letfn
from formula.hoisting.walk_forms.fn_form import walk_fn_form
from formula.hoisting.walk_forms.quote_forms import walk_quote, walk_unquote, walk_unquote_splicing

WALK_FORMS = {
    Symbol("."): walk_dot,
    Symbol("try"): walk_try,
    Symbol("let*"): walk_let,
    Symbol("loop*"): walk_let,
    Symbol("letfn*"): walk_letfn,
    Symbol("fn*"): walk_fn_form,
    Symbol("quote"): walk_quote,
    Symbol("unquote"): walk_unquote,
    Symbol("clojure.core/unquote"): walk_unquote,
    Symbol("unquote-splicing"): walk_unquote_splicing,
    Symbol("clojure.core/unquote-splicing"): walk_unquote_splicing,
}

UNSUPPORTED_FORMS = frozenset(
    {Symbol("def"), Symbol("ns"), Symbol("deftype*"), Symbol("defrecord*")}
)
