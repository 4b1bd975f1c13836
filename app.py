import logging
import os

import streamlit as st
import pandas as pd
import plotly.express as px

from components.bench import BenchConfig, check_agreement, run_bench
from components.term_loader import TermFileError, load_terms
from components.work_loads.term_generator import TERM_KINDS
from components.work_loads.workload import WorkLoad
from tries.weighted_trie import WeightedTrie

LOG_LEVEL = os.environ.get("TRIEBENCH_LOG_LEVEL", "INFO").upper()
logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger("triebench.app")

# Configure page
st.set_page_config(
    page_title="Weighted Trie Autocomplete Bench",
    page_icon="🔎",
    layout="wide",
    initial_sidebar_state="expanded"
)

# Main title
st.title("🔎 Weighted Trie Autocomplete Bench")
st.markdown("---")

# Sidebar
with st.sidebar:
    st.header("Navigation")
    page = st.selectbox(
        "Choose a section:",
        ["Home", "Load Terms", "Query", "Benchmark"]
    )

    st.markdown("---")
    st.subheader("Quick Actions")
    if st.button("🗑️ Clear Vocabulary"):
        for key in ("terms", "weights", "trie"):
            st.session_state.pop(key, None)
        st.rerun()


def store_vocabulary(terms, weights):
    st.session_state["terms"] = terms
    st.session_state["weights"] = weights
    st.session_state["trie"] = WeightedTrie(terms, weights)
    logger.info("vocabulary set: %d terms", len(terms))


# Main content area
if page == "Home":
    st.header("Welcome to the Autocomplete Bench")

    st.markdown("""
    This app builds a weighted prefix trie from a vocabulary of `(term, weight)` pairs and
    answers ranked autocomplete queries with a best-first search over subtree maxima.

    **Sections:**
    - 📁 Load a vocabulary from a delimited file, or generate one
    - 🔍 Query top-k completions for a prefix
    - ⏱️ Benchmark the trie against a brute-force scan
    """)

    trie = st.session_state.get("trie")
    col1, col2, col3 = st.columns(3)

    with col1:
        st.metric("Terms", f"{len(trie):,}" if trie else "0")

    with col2:
        st.metric("Nodes", f"{trie.count_nodes():,}" if trie else "0")

    with col3:
        st.metric("Avg Branching", f"{trie.count_nodes(get_avg_branch_factor=True):.2f}" if trie else "-")

elif page == "Load Terms":
    st.header("📁 Load Terms")

    tab1, tab2 = st.tabs(["Upload File", "Generate"])

    with tab1:
        uploaded_file = st.file_uploader(
            "Choose a term file",
            type=['txt', 'tsv', 'csv'],
            help="One term per line: weight and term separated by the delimiter"
        )
        col1, col2, col3 = st.columns(3)
        with col1:
            sep_name = st.selectbox("Delimiter", ["tab", "comma"])
        with col2:
            weight_first = st.checkbox("Weight column first", value=True)
        with col3:
            skiprows = st.number_input("Skip leading lines", min_value=0, value=0)

        if uploaded_file is not None:
            sep = "\t" if sep_name == "tab" else ","
            try:
                terms, weights = load_terms(uploaded_file, sep=sep, weight_first=weight_first,
                                            skiprows=int(skiprows))
            except TermFileError as e:
                st.error(f"❌ Error reading file: {e}")
            else:
                store_vocabulary(terms, weights)
                st.success(f"✅ Loaded {len(terms):,} terms")

    with tab2:
        col1, col2, col3 = st.columns(3)
        with col1:
            kind = st.selectbox("Term kind", sorted(TERM_KINDS))
        with col2:
            num_terms = st.number_input("Number of terms", min_value=1, max_value=50_000, value=500)
        with col3:
            seed = st.number_input("Seed", min_value=0, value=42)
        zipf_s = st.slider("Zipf exponent", min_value=0.0, max_value=3.0, value=1.1)

        if st.button("Generate"):
            try:
                terms, weights = WorkLoad(seed=int(seed)).terms(int(num_terms), kind=kind, zipf_s=zipf_s)
            except ValueError as e:
                st.error(f"❌ {e}")
            else:
                store_vocabulary(terms, weights)
                st.success(f"✅ Generated {len(terms):,} terms")

    if "terms" in st.session_state:
        st.subheader("Vocabulary Preview")
        df = pd.DataFrame({"term": st.session_state["terms"], "weight": st.session_state["weights"]})
        st.dataframe(df.sort_values("weight", ascending=False).head(100), use_container_width=True)

elif page == "Query":
    st.header("🔍 Query")

    trie = st.session_state.get("trie")
    if trie is None:
        st.info("📁 Please load terms in the 'Load Terms' section first")
    else:
        col1, col2 = st.columns([3, 1])
        with col1:
            prefix = st.text_input("Prefix", value="")
        with col2:
            k = st.number_input("k", min_value=0, max_value=1000, value=10)

        matches = trie.top_matches(prefix, int(k))
        st.write(f"**Top match:** `{trie.top_match(prefix) or '(none)'}`")

        if matches:
            df = pd.DataFrame({"term": matches, "weight": [trie.weight_of(t) for t in matches]})
            col1, col2 = st.columns(2)
            with col1:
                st.dataframe(df, use_container_width=True)
            with col2:
                fig = px.bar(df, x="term", y="weight", title=f"Top {len(matches)} completions of '{prefix}'")
                st.plotly_chart(fig, use_container_width=True)
        else:
            st.warning("⚠️ No term starts with this prefix")

        with st.expander("Weight lookup"):
            term = st.text_input("Term")
            if term:
                st.write(f"weight_of('{term}') = {trie.weight_of(term)}"
                         f"{'' if term in trie else ' (not stored)'}")

elif page == "Benchmark":
    st.header("⏱️ Benchmark")

    if "terms" not in st.session_state:
        st.info("📁 Please load terms in the 'Load Terms' section first")
    else:
        terms = st.session_state["terms"]
        weights = st.session_state["weights"]

        col1, col2, col3 = st.columns(3)
        with col1:
            num_queries = st.number_input("Queries", min_value=1, max_value=10_000, value=200)
        with col2:
            max_len = st.number_input("Max prefix length", min_value=1, max_value=10, value=3)
        with col3:
            k = st.number_input("k", min_value=1, max_value=100, value=10)

        if st.button("Run Benchmark"):
            prefixes = WorkLoad(seed=0).prefixes(terms, int(num_queries), int(max_len))
            results = run_bench(terms, weights, prefixes, BenchConfig(k=int(k)))
            st.dataframe(results, use_container_width=True)

            fig = px.bar(results, x="impl", y="query_mean_us", title="Mean query latency (µs)")
            st.plotly_chart(fig, use_container_width=True)

            mismatches = check_agreement(terms, weights, prefixes, int(k))
            if mismatches:
                st.error(f"❌ {len(mismatches)} prefixes disagree with the brute-force scan")
            else:
                st.success("✅ Trie results agree with the brute-force scan")

# Footer
st.markdown("---")
st.markdown(
    """
    <div style='text-align: center; color: #B0B0B0; padding: 1rem;'>
        Built with Streamlit 🚀 | Weighted Trie Autocomplete Bench
    </div>
    """,
    unsafe_allow_html=True
)
