# cli.py
import argparse
import json
import sys

print("[CLI] Booting...")

from risk_analyzer.config import load_settings
from risk_analyzer.errors import InvalidAddressError, UnsupportedTargetError

try:
    from risk_analyzer.core.analyze import analyze_address
    print("[CLI] Import analyze_address: OK")
except Exception as e:
    print("[CLI] Import analyze_address: FAIL ->", e)
    sys.exit(1)


def _tier(overall: float) -> str:
    return "LOW" if overall < 0.3 else ("MEDIUM" if overall < 0.6 else "HIGH")


def print_report(result: dict) -> None:
    details = result.get("details") or {}
    print(f"📄 Contract: {details.get('contractName', '?')}  "
          f"verified={details.get('contractVerified')}  token={details.get('isToken')}")
    print(f"🔧 Compiler: {details.get('compilerVersion', 'unknown')}  "
          f"optimized={details.get('optimizationEnabled')}  "
          f"code quality≈{float(details.get('codeQuality', 0.0)):.2f}")
    print(f"📅 Protocol age ≈ {details.get('protocolAge', 0)} years")

    issues = details.get("securityIssues") or []
    if issues:
        print("🚨 Security issues:")
        for issue in issues:
            print(f"   - {issue}")
    else:
        print("✅ No security issues detected.")

    ts = details.get("tokenSecurity")
    if ts:
        print(f"💸 Buy tax ≈ {ts.get('buyTax')}%  Sell tax ≈ {ts.get('sellTax')}%")

    overall = float(result.get("overallRisk", 0.0))
    print(f"🧮 Contract risk: {float(result.get('contractRisk', 0.0)):.3f}  "
          f"Security risk: {float(result.get('securityRisk', 0.0)):.3f}")
    print(f"🧮 Overall risk: {overall:.3f}")
    tier = _tier(overall)
    print("❗ HIGH RISK" if tier == "HIGH"
          else "⚠️  MEDIUM RISK" if tier == "MEDIUM"
          else "✅ LOW RISK")


def main(argv=None) -> int:
    print("[CLI] Parsing arguments...")
    p = argparse.ArgumentParser(description="Contract Risk Analyzer CLI")
    p.add_argument("--address", required=True, help="Ethereum contract address")
    p.add_argument("--json", action="store_true", help="Print JSON only")
    args = p.parse_args(argv)
    print(f"[CLI] Args -> address={args.address} json={args.json}")

    settings = load_settings()
    try:
        metrics = analyze_address(args.address, settings=settings)
    except InvalidAddressError as e:
        print(f"❌ {e}")
        return 1
    except UnsupportedTargetError as e:
        payload = e.to_payload()
        if args.json:
            print(json.dumps(payload, indent=2))
        else:
            print(f"ℹ️ {payload['error']}: {payload['message']}")
        return 0

    result = metrics.to_dict()
    if args.json:
        print(json.dumps(result, indent=2, sort_keys=False, default=str))
    else:
        print_report(result)
    print("[CLI] Done.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
