from pathlib import Path

SAMPLE_XML_RESPONSE_1 = (Path(__file__).parent / "valid_sample.xml").read_text(
    encoding="utf-8"
)

# Second feed: Camela changes zones and prices, Pantomima's 1643 and the
# offline Los Morancos plan are gone from the feed.
SAMPLE_XML_RESPONSE_2_SUBSET = """<?xml version="1.0" encoding="UTF-8"?>
<planList version="1.0">
   <output>
      <base_plan base_plan_id="291" sell_mode="online" title="Camela en concierto (nueva fecha)">
         <plan plan_start_date="2021-06-30T21:00:00" plan_end_date="2021-06-30T23:00:00" plan_id="291" sell_from="2020-07-01T00:00:00" sell_to="2021-06-30T20:00:00" sold_out="true">
            <zone zone_id="40" capacity="200" price="25.50" name="Platea" numbered="true" />
            <zone zone_id="41" capacity="50" price="10.00" name="Anfiteatro" numbered="false" />
         </plan>
      </base_plan>
      <base_plan base_plan_id="322" sell_mode="online" organizer_company_id="2" title="Pantomima Full">
         <plan plan_start_date="2021-02-10T20:00:00" plan_end_date="2021-02-10T21:30:00" plan_id="1642" sell_from="2021-01-01T00:00:00" sell_to="2021-02-09T19:50:00" sold_out="false">
            <zone zone_id="311" capacity="2" price="55.00" name="A42" numbered="true" />
         </plan>
      </base_plan>
   </output>
</planList>
"""

EMPTY_XML_RESPONSE = """<?xml version="1.0" encoding="UTF-8"?>
<planList version="1.0">
   <output />
</planList>
"""

MISSING_OUTPUT_XML_RESPONSE = """<?xml version="1.0" encoding="UTF-8"?>
<planList version="1.0" />
"""

MALFORMED_XML_RESPONSE = (
    "<planList><output><base_plan></plan></base_plan></output></planListNONSENSE>"
)

# One good plan next to records that cannot be mapped.
CORRUPT_RECORDS_XML_RESPONSE = """<?xml version="1.0" encoding="UTF-8"?>
<planList version="1.0">
   <output>
      <base_plan base_plan_id="900" sell_mode="online" title="Corrupt Data Test">
         <plan plan_start_date="2021-05-01T20:00:00" plan_end_date="2021-05-01T22:00:00" plan_id="C1" sell_from="2021-01-01T00:00:00" sell_to="2021-05-01T19:00:00" sold_out="false">
            <zone zone_id="Z1" capacity="NOT_AN_INT" price="10.0" name="Bad Capacity" numbered="true" />
            <zone zone_id="Z2" capacity="10" price="NOT_A_FLOAT" name="Bad Price" numbered="TRUE" />
         </plan>
         <plan plan_start_date="not-a-date" plan_end_date="2021-05-02T22:00:00" plan_id="C2" sell_from="2021-01-01T00:00:00" sell_to="2021-05-02T19:00:00" sold_out="false" />
         <plan plan_start_date="2021-05-03T22:00:00" plan_end_date="2021-05-03T20:00:00" plan_id="C3" sell_from="2021-01-01T00:00:00" sell_to="2021-05-03T19:00:00" sold_out="false" />
      </base_plan>
      <base_plan base_plan_id="901" sell_mode="online" title="No plans here" />
      <base_plan base_plan_id="902" sell_mode="streaming" title="Unknown sell mode">
         <plan plan_start_date="2021-05-04T20:00:00" plan_end_date="2021-05-04T22:00:00" plan_id="C4" sell_from="2021-01-01T00:00:00" sell_to="2021-05-04T19:00:00" sold_out="false" />
      </base_plan>
   </output>
</planList>
"""
