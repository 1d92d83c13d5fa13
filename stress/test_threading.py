import random
import threading

from reglang.automata.builder import AutomatonBuilder


def even_as():
    # Strings over {a, b, cc} with an even number of "a"
    return (
        AutomatonBuilder()
        .add_symbols(["a", "b", "cc"])
        .add_states(["even", "odd", "even2", "odd2"])
        .set_start("even")
        .add_finals(["even", "even2"])
        .add_transition("even", "a", "odd")
        .add_transition("odd", "a", "even2")
        .add_epsilon("even2", "even")
        .add_transition("even", "b", "even")
        .add_transition("even", "cc", "even")
        .add_transition("odd", "b", "odd2")
        .add_epsilon("odd2", "odd")
        .add_transition("odd", "cc", "odd")
        .build()
    )


def test_concurrent_queries():
    fsa = even_as()
    domain = ("a", "b", "cc")
    words = []
    for _ in range(300):
        parts = [random.choice(domain) for _ in range(random.randint(0, 30))]
        words.append(("".join(parts), parts.count("a") % 2 == 0))

    errors = []

    class QueryThread(threading.Thread):
        def run(self):
            for word, expected in words:
                if fsa.accepts(word) != expected:
                    errors.append((self.name, word))

    threads = [QueryThread() for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
