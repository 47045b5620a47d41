# routes.py
# Links are Streamlit query strings; app.py reads them back from st.query_params.

COUNTY_PARAM = "county"
STATE_PARAM = "state"


def county_results_href(fips: str) -> str:
    return f"?{COUNTY_PARAM}={fips}"


def state_results_href(fips: str) -> str:
    return f"?{STATE_PARAM}={fips}"
