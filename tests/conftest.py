"""
Shared fixtures for rustmin tests.
"""

import os
import subprocess
import sys
import textwrap
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parent.parent


@pytest.fixture
def sample_code() -> str:
    """Realistic Rust file with docs, generics, closures and macros."""
    return textwrap.dedent('''\
        //! Sample crate.
        #![deny(missing_docs)]

        use std::collections::HashMap;

        /// A generic wrapper.
        #[derive(Debug, Clone, PartialEq)]
        pub struct Wrapper<'a, T: Clone + 'a> {
            /// Borrowed name.
            pub name: &'a str,
            items: Vec<T>,
        }

        impl<'a, T: Clone + 'a> Wrapper<'a, T> {
            /// Creates a wrapper.
            pub fn new(name: &'a str) -> Self {
                Self { name, items: Vec::new() }
            }

            pub fn push(&mut self, item: T) -> &mut Self {
                self.items.push(item);
                self
            }
        }

        /// Names a number.
        pub fn classify(n: i64) -> &'static str {
            match n {
                0 => "zero",
                1..=9 => "digit",
                _ => "large",
            }
        }

        fn main() {
            let mut counts: HashMap<String, usize> = HashMap::new();
            let words = r#"a "quoted" b"#;
            for w in words.split(' ') {
                *counts.entry(w.to_string()).or_insert(0) += 1;
            }
            let total: f64 = (0..10).map(|x| x as f64 * 0.5).sum();
            let ok = total >= 1.5 && !counts.is_empty() || false;
            let shifted = 1u32 << 3 >> 1;
            if ok && shifted < -0 {
                println!("{} {:?}", total, shifted);
            }
        }
        ''')


def run_cli(cwd: Path, *args: str, stdin: str = "") -> subprocess.CompletedProcess:
    """Run `python -m rustmin.cli` with the repository on the import path."""
    env = os.environ.copy()
    env["PYTHONPATH"] = str(REPO_ROOT) + os.pathsep + env.get("PYTHONPATH", "")
    return subprocess.run(
        [sys.executable, "-m", "rustmin.cli", *args],
        cwd=cwd, env=env, input=stdin, capture_output=True, text=True, encoding="utf-8"
    )
